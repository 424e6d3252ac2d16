"""Background runtime components for Waitroom."""

from waitroom.runtime.scheduling import AdmissionScheduler

__all__ = ["AdmissionScheduler"]
