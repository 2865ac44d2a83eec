"""Human-readable trace of a section extraction, for inspection only."""

from typing import Sequence


def format_debug_trace(
    t_ms: Sequence[float],
    labels: Sequence[str],
    is_start: Sequence[bool],
    is_last: Sequence[bool],
    is_gap_end: Sequence[bool],
    spans: dict[int, tuple[float, float]],
) -> str:
    """Render one line per sample with run and gap markers.

    Each line reads ``t: label | <-START <-LAST <-GAP | DUR: d (on -> off)``,
    with blanks in place of markers that do not apply. The duration summary
    appears on the first sample of each section.

    Args:
        t_ms: Timestamps of the real samples.
        labels: Normalized labels of the real samples.
        is_start: Whether each sample starts a section.
        is_last: Whether each sample is the last of its section.
        is_gap_end: Whether each sample follows a detected gap.
        spans: (onset, offset) keyed by the sample index starting it.

    Returns:
        The trace as a single string.
    """
    width = max((len(label) for label in labels), default=0) + 1
    lines = []
    for i, t in enumerate(t_ms):
        summary = ""
        if i in spans:
            onset, offset = spans[i]
            summary = f"DUR: {offset - onset:.1f} ({onset:.1f} -> {offset:.1f})"
        lines.append(
            f"{t:7.1f}: {labels[i]:<{width}} | "
            f"{'<-START' if is_start[i] else '       '} "
            f"{'<-LAST' if is_last[i] else '      '} "
            f"{'<-GAP' if is_gap_end[i] else '     '} | {summary}".rstrip()
        )
    return "\n".join(lines)
