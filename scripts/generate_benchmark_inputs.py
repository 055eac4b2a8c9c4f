#!/usr/bin/env python3
"""
Generate benchmark input files by replicating story.txt to different sizes.
"""

import sys
from pathlib import Path

# Configuration
SHARED_DIR = Path("shared")
SAMPLES_DIR = SHARED_DIR / "samples"
INPUT_DIR = SHARED_DIR / "input"
SOURCE_FILE = SAMPLES_DIR / "story.txt"

# Target sizes (approximate)
TARGETS = [
    ("story_sm.txt", 4 * 1024),                # ~4KB
    ("story_medium.txt", 981 * 1024),          # ~1MB
    ("story_large.txt", 9.6 * 1024 * 1024),    # ~10MB
]


def generate_file(output_path: Path, target_size: int, source_content: bytes) -> int:
    """
    Generate a file by replicating source content until target size is reached.

    Args:
        output_path: Path where the output file should be written
        target_size: Target file size in bytes
        source_content: The content to replicate

    Returns:
        Size of the written file in bytes
    """
    source_size = len(source_content)
    if source_size == 0:
        raise ValueError("Source file is empty!")

    replications = int(target_size / source_size)

    with open(output_path, 'wb') as f:
        for _ in range(replications):
            f.write(source_content)

        # Partial copy to land on the target size; may cut a word, which is fine
        remaining = int(target_size - (replications * source_size))
        if remaining > 0:
            f.write(source_content[:remaining])

    actual_size = output_path.stat().st_size
    print(f"  ✓ Created: {output_path.name} ({actual_size / (1024*1024):.2f} MB, {replications} replications)")
    return actual_size


def main():
    """Generate all benchmark input files."""
    INPUT_DIR.mkdir(parents=True, exist_ok=True)

    if not SOURCE_FILE.exists():
        print(f"❌ Source file not found: {SOURCE_FILE}")
        return 1

    source_content = SOURCE_FILE.read_bytes()
    print(f"Source file: {SOURCE_FILE} ({len(source_content)} bytes)")

    for filename, target_size in TARGETS:
        output_path = INPUT_DIR / filename

        if output_path.exists():
            existing_size = output_path.stat().st_size
            if abs(existing_size - target_size) < target_size * 0.1:  # Within 10%
                print(f"  Skipping {filename} (already exists, size: {existing_size / (1024*1024):.2f} MB)")
                continue

        try:
            generate_file(output_path, target_size, source_content)
        except (OSError, ValueError) as e:
            print(f"  ❌ Error generating {filename}: {e}")
            return 1

    print(f"✓ Files created in: {INPUT_DIR}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
