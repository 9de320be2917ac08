"""Integer rounding helpers for non-negative values and positive steps."""


def _check(x, step):
    if x < 0:
        raise ValueError(f"value must be non-negative, got {x}")
    if step < 1:
        raise ValueError(f"step must be at least 1, got {step}")


def round_up(x, step):
    """Round X up to the nearest multiple of STEP."""
    _check(x, step)
    return (x + step - 1) // step * step


def div_round_up(x, step):
    """Divide X by STEP, rounding up."""
    _check(x, step)
    return (x + step - 1) // step


def round_down(x, step):
    """Round X down to the nearest multiple of STEP."""
    _check(x, step)
    return x // step * step