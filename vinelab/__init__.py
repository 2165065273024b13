"""vinelab: soil & petiole lab-test interpretation and fertilizer planning."""

__version__ = "0.1.0"
