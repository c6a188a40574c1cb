"""Data structures exchanged between the readers, the check and the writers."""

from .event import EventData, build_relation
from .result import CheckResult, HitDiagnostic
