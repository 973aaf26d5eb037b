"""Small interpolation helpers used by the chart series builder."""


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, value: float) -> float:
    if a == b:
        return 0.0
    return (value - a) / (b - a)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def clamp01(t: float) -> float:
    return clamp(t, 0.0, 1.0)
