from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY posts={n} skipped_rows={n} services={n} projects={n}
contact_fields={n} images={n} image_failures={n} elapsed_sec={x}
"""


def format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation for tiny values
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.2f}".rstrip("0").rstrip(".")


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> result = RunResult(
        ...     posts_written=3, skipped_rows=1, services=2, projects=1,
        ...     contact_fields=3, images_downloaded=4, image_failures=0,
        ...     elapsed_seconds=2.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY posts=3 skipped_rows=1 services=2 projects=1 contact_fields=3 images=4 image_failures=0 elapsed_sec=2'
    """
    return (
        f"SUMMARY posts={result.posts_written} "
        f"skipped_rows={result.skipped_rows} "
        f"services={result.services} "
        f"projects={result.projects} "
        f"contact_fields={result.contact_fields} "
        f"images={result.images_downloaded} "
        f"image_failures={result.image_failures} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )


def render_sheet_lines(result: RunResult) -> list[str]:
    """One line per processed sheet, for debug output.

    Examples:
        >>> from sheet2site.models.processing_result import SheetStat
        >>> stat = SheetStat(kind="posts", rows=3, accepted=2, skipped=1, elapsed_seconds=0.5)
        >>> result = RunResult(
        ...     posts_written=2, skipped_rows=1, services=0, projects=0,
        ...     contact_fields=0, images_downloaded=0, image_failures=0,
        ...     elapsed_seconds=0.5, sheet_stats=[stat],
        ... )
        >>> render_sheet_lines(result)
        ['sheet=posts rows=3 accepted=2 skipped=1 elapsed_sec=0.5']
    """
    return [
        f"sheet={stat.kind} rows={stat.rows} accepted={stat.accepted} "
        f"skipped={stat.skipped} elapsed_sec={format_seconds(stat.elapsed_seconds)}"
        for stat in result.sheet_stats or []
    ]
