"""Physical memory snapshots, x86 page-table translation and Windows kernel structure offsets."""

__version__ = "0.1.0"

__all__ = [
    "offsets",
    "paging",
    "physical",
    "static_offsets",
    "translator",
    "virtual_memory",
    "win2000",
]