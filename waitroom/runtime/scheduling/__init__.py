"""Scheduling subsystem for Waitroom."""

from waitroom.runtime.scheduling.admission import AdmissionScheduler

__all__ = ["AdmissionScheduler"]
