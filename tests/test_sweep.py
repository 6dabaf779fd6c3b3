"""
Tests for the batch sweep
"""

from datetime import date

import pytest

from eligex.jobs.sweep import BatchSweep, SweepConfig, run_sweep
from eligex.models.eligibility import CandidateProfile


DOCUMENTS = {
    'open_exam': {'exam_name': 'Open Exam', 'gender': 'MALE, FEMALE'},
    'male_only': {'exam_name': 'Male Only', 'gender': 'MALE'},
    'age_limited': {
        'exam_name': 'Age Limited',
        'age_criteria_type': 'ENDING_AGE',
        'ending_age': {'2026': '30'},
    },
}


class TestBatchSweep:
    """Test BatchSweep.run"""

    def setup_method(self):
        """Set up test environment"""
        self.candidate = CandidateProfile(gender='FEMALE', date_of_birth='15-06-2003')
        self.today = date(2026, 1, 15)

    @pytest.mark.asyncio
    async def test_splits_by_verdict(self):
        """Test that documents are grouped by verdict"""
        sweep = BatchSweep(SweepConfig(max_concurrent=2), today=self.today)
        result = await sweep.run(self.candidate, DOCUMENTS)

        assert [entry.name for entry in result.eligible] == ['open_exam', 'age_limited']
        assert [entry.name for entry in result.ineligible] == ['male_only']
        assert result.failed == []
        assert result.total == 3

    @pytest.mark.asyncio
    async def test_failed_document_does_not_stop_sweep(self):
        """Test that an invalid document is recorded as failed"""
        documents = dict(DOCUMENTS, broken=None)
        sweep = BatchSweep(SweepConfig(max_concurrent=1), today=self.today)
        result = await sweep.run(self.candidate, documents)

        assert [entry.name for entry in result.failed] == ['broken']
        assert 'exam document is required' in result.failed[0].error
        assert len(result.eligible) == 2
        assert sweep.get_stats()['failed_count'] == 1
        assert sweep.get_stats()['processed_count'] == 3

    @pytest.mark.asyncio
    async def test_accepts_mapping_candidate(self):
        """Test that a plain mapping is accepted as the candidate"""
        result = await run_sweep({'gender': 'MALE'}, {'male_only': DOCUMENTS['male_only']}, today=self.today)
        assert [entry.name for entry in result.eligible] == ['male_only']

    @pytest.mark.asyncio
    async def test_entries_carry_reports(self):
        """Test that each entry keeps its reports"""
        result = await run_sweep(self.candidate, {'open_exam': DOCUMENTS['open_exam']}, today=self.today)
        entry = result.eligible[0]
        assert entry.reports[0].exam_name == 'Open Exam'
        assert entry.eligible

    def test_config_defaults(self):
        """Test the sweep configuration defaults"""
        config = SweepConfig()
        assert config.max_concurrent == 8
        assert config.document_timeout == 30.0
