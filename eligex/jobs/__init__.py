"""
EligEX Jobs Module

Provides concurrent evaluation of one candidate against many exams.

Components:
- BatchSweep: Bounded fan-out of evaluate_exam over exam documents
- SweepConfig: Concurrency and timeout settings
"""

from .sweep import BatchSweep, SweepConfig, SweepEntry, SweepResult, run_sweep

__all__ = [
    'BatchSweep',
    'SweepConfig',
    'SweepEntry',
    'SweepResult',
    'run_sweep',
]
