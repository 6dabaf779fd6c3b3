"""
Batch Sweep

Evaluates one candidate against many exam documents concurrently, for
"which exams am I eligible for" lookups. Each document is an independent
evaluation; results are only collected, never combined.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Union

from eligex.config.eligex_config import EligEXConfig
from eligex.models.eligibility import CandidateProfile, EligibilityReport
from eligex.orchestrator import evaluate_exam, is_eligible_for_exam

logger = logging.getLogger(__name__)


@dataclass
class SweepConfig:
    """Sweep configuration"""
    # Concurrency
    max_concurrent: int = 8

    # Timeouts
    document_timeout: float = 30.0  # seconds

    @classmethod
    def from_config(cls, config: Optional[EligEXConfig] = None) -> 'SweepConfig':
        sweep_config = (config or EligEXConfig()).get_sweep_config()
        return cls(
            max_concurrent=int(sweep_config.get('max_concurrent', cls.max_concurrent)),
            document_timeout=float(sweep_config.get('document_timeout', cls.document_timeout)),
        )


@dataclass
class SweepEntry:
    """Outcome of one document in a sweep"""
    name: str
    reports: List[EligibilityReport] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def eligible(self) -> bool:
        return self.error is None and is_eligible_for_exam(self.reports)


@dataclass
class SweepResult:
    """Sweep outcome split by verdict, in catalog order"""
    eligible: List[SweepEntry] = field(default_factory=list)
    ineligible: List[SweepEntry] = field(default_factory=list)
    failed: List[SweepEntry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.eligible) + len(self.ineligible) + len(self.failed)


class BatchSweep:
    """
    Bounded fan-out of evaluate_exam over exam documents.

    Usage:
        sweep = BatchSweep(SweepConfig(max_concurrent=4))
        result = await sweep.run(candidate, {'nda': nda_doc, 'cds': cds_doc})
        for entry in result.eligible:
            print(entry.name)
    """

    def __init__(
        self,
        config: Optional[SweepConfig] = None,
        engine_config: Optional[EligEXConfig] = None,
        today: Optional[date] = None,
    ):
        self.config = config or SweepConfig()
        self.engine_config = engine_config
        self.today = today

        self._semaphore: Optional[asyncio.Semaphore] = None
        self._processed_count = 0
        self._failed_count = 0

    async def run(
        self,
        candidate: Union[CandidateProfile, Dict[str, Any]],
        documents: Dict[str, Dict[str, Any]],
    ) -> SweepResult:
        """
        Evaluate the candidate against every document.

        Args:
            candidate: Candidate profile (or a mapping accepted by it)
            documents: Exam documents keyed by name

        Returns:
            SweepResult; documents that raise or time out land in failed
        """
        if isinstance(candidate, dict):
            candidate = CandidateProfile.model_validate(candidate)

        self._semaphore = asyncio.Semaphore(self.config.max_concurrent)
        logger.info(f"Sweeping {len(documents)} exam documents (max_concurrent={self.config.max_concurrent})")

        tasks = [self._evaluate_document(name, document, candidate) for name, document in documents.items()]
        entries = await asyncio.gather(*tasks)

        result = SweepResult()
        for entry in entries:
            if entry.error is not None:
                result.failed.append(entry)
            elif entry.eligible:
                result.eligible.append(entry)
            else:
                result.ineligible.append(entry)

        logger.info(
            f"Sweep finished. Eligible: {len(result.eligible)}, Ineligible: {len(result.ineligible)}, "
            f"Failed: {len(result.failed)}"
        )
        return result

    async def _evaluate_document(self, name: str, document: Dict[str, Any], candidate: CandidateProfile) -> SweepEntry:
        """Evaluate a single document"""
        async with self._semaphore:
            try:
                reports = await asyncio.wait_for(
                    asyncio.to_thread(evaluate_exam, document, candidate, self.today, None, self.engine_config),
                    timeout=self.config.document_timeout
                )
                self._processed_count += 1
                return SweepEntry(name=name, reports=reports)

            except asyncio.TimeoutError:
                logger.error(f"Evaluation of {name} timed out after {self.config.document_timeout}s")
                self._failed_count += 1
                return SweepEntry(name=name, error='Evaluation timeout')

            except Exception as e:
                logger.exception(f"Evaluation of {name} failed: {e}")
                self._failed_count += 1
                return SweepEntry(name=name, error=str(e))

    def get_stats(self) -> Dict[str, Any]:
        """Get sweep statistics"""
        return {
            'processed_count': self._processed_count,
            'failed_count': self._failed_count,
            'max_concurrent': self.config.max_concurrent,
        }


async def run_sweep(
    candidate: Union[CandidateProfile, Dict[str, Any]],
    documents: Dict[str, Dict[str, Any]],
    config: Optional[SweepConfig] = None,
    today: Optional[date] = None,
) -> SweepResult:
    """
    Convenience function to run a sweep.

    Args:
        candidate: Candidate profile
        documents: Exam documents keyed by name
        config: Optional sweep configuration
        today: Date session reference dates are derived from
    """
    sweep = BatchSweep(config, today=today)
    return await sweep.run(candidate, documents)
