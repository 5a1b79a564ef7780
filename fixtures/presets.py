# fixtures/presets.py
from types import MappingProxyType

# Sizes in megabytes, generated in this order
FULL_SIZES = (
    8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128,
    160, 192, 224, 256, 320, 384, 448, 512, 640, 768, 896, 1024,
)
QUICK_SIZES = (8, 16, 32, 64, 128, 256, 512, 1024)

PRESETS = MappingProxyType({"full": FULL_SIZES, "quick": QUICK_SIZES})
DEFAULT_PRESET = "full"


def resolve_sizes(preset=None, sizes=None):
    """
    Pick the ordered size list for a run.

    An explicit ``sizes`` list wins over ``preset``; with neither given the
    full preset is used.
    """
    if sizes is not None:
        if not sizes:
            raise ValueError("Size list is empty, nothing to generate")
        return tuple(sizes)

    preset = preset or DEFAULT_PRESET
    if preset not in PRESETS:
        raise ValueError(
            f"Unsupported size preset: {preset} (expected one of {', '.join(PRESETS)})"
        )
    return PRESETS[preset]
