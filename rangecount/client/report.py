"""Formatting helpers for count reports."""

from typing import List, Mapping, Optional, Tuple

from rangecount.worker.range_counter import RangeResult


def rank_words(table: Mapping[str, int], top: Optional[int] = None) -> List[Tuple[str, int]]:
    """Sort by count descending, then word ascending; keep the first `top`."""
    ranked = sorted(table.items(), key=lambda kv: (-kv[1], kv[0]))
    if top is not None and top >= 0:
        return ranked[:top]
    return ranked


def format_duration(seconds: float) -> str:
    """Format duration in seconds to human readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds / 60)
    seconds = seconds % 60
    if minutes < 60:
        return f"{minutes}m {seconds:.1f}s"
    hours = int(minutes / 60)
    minutes = minutes % 60
    return f"{hours}h {minutes}m {seconds:.1f}s"


def format_bytes(num_bytes: int) -> str:
    size = float(num_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024


def format_word_table(ranked: List[Tuple[str, int]]) -> str:
    """Render ranked (word, count) pairs as an aligned table."""
    if not ranked:
        return "(no words)"

    rank_width = len(str(len(ranked)))
    word_width = max(4, max(len(word) for word, _ in ranked))
    count_width = max(5, max(len(str(count)) for _, count in ranked))

    lines = [f"{'#':>{rank_width}}  {'Word':<{word_width}}  {'Count':>{count_width}}",
             "-" * (rank_width + word_width + count_width + 4)]
    for i, (word, count) in enumerate(ranked, start=1):
        lines.append(f"{i:>{rank_width}}  {word:<{word_width}}  {count:>{count_width}}")
    return "\n".join(lines)


def format_range_summary(result: RangeResult, top: int = 5) -> str:
    """Describe one range: byte span, timing, and its most frequent words."""
    header = (f"Segment {result.range_id}: bytes [{result.start_byte}, {result.end_byte}) "
              f"length={result.end_byte - result.start_byte} "
              f"unique={len(result.table)} total={result.total_words} "
              f"time={result.execution_time_ms}ms")
    ranked = rank_words(result.table, top)
    if not ranked:
        return header
    words = ", ".join(f"{word}={count}" for word, count in ranked)
    return f"{header}\n    top: {words}"
