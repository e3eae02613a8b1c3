"""Experience points derived from reading, commenting and favoriting."""

from innovateflow_progress.models.user import UserActivity

XP_PER_READ = 10
XP_PER_COMMENT = 25
XP_PER_FAVORITE = 5


def compute_xp(
    read_count: int | None,
    comment_count: int | None,
    favorite_count: int | None,
) -> int:
    """Total XP for the given engagement counts.

    Always computed from the full counts, never patched incrementally, so the
    cached value on a user record cannot drift. Missing counts count as zero.
    """
    return (
        (read_count or 0) * XP_PER_READ
        + (comment_count or 0) * XP_PER_COMMENT
        + (favorite_count or 0) * XP_PER_FAVORITE
    )


def compute_activity_xp(activity: UserActivity) -> int:
    return compute_xp(activity.read_count, activity.comment_count, activity.favorite_count)
