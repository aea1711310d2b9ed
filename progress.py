from tqdm import tqdm

# CONFIG
BAR_SEGMENTS = 10
BUCKET_SIZE = 100 // BAR_SEGMENTS


def to_percent(value, target):
    # truncates toward zero
    return int(value / target * 100)


def progress_bucket(percent):
    return percent // BUCKET_SIZE


def should_redraw(old_percent, new_percent):
    return progress_bucket(old_percent) != progress_bucket(new_percent)


def render_bar(percent):
    segments = "".join(
        "#" if i * BUCKET_SIZE < percent else "-" for i in range(BAR_SEGMENTS)
    )
    return f"[{segments}] {percent:3d}%"


def update_progress(new_progress, old_progress, target, file=None):
    """Redraw the progress bar in place when a 10% boundary is crossed.

    Stateless: the caller passes the previous index alongside the current one,
    so a phase of any length redraws at most eleven times (0%, 10%, ... 100%).
    A target of zero or less draws nothing.
    """
    if target <= 0:
        return False

    new_percent = to_percent(new_progress, target)
    old_percent = to_percent(old_progress, target)
    if not should_redraw(old_percent, new_percent):
        return False

    tqdm.write(render_bar(new_percent), file=file, end="\r")
    return True
