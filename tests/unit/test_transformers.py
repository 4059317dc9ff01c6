"""Unit tests for project metric normalization."""
import pytest

from qhse_risk.schemas import ProjectRecord
from qhse_risk.transformers.project_transformer import (
    METRIC_FIELDS,
    ProjectMetrics,
    to_metrics,
)


class TestToMetrics:
    """Test per-project metric normalization."""

    def test_critical_fixture(self, critical_project):
        """Every metric column is normalized."""
        metrics = to_metrics(critical_project)
        assert metrics == ProjectMetrics(
            completion=85.0,
            billability=125.0,
            kpi_achieved=55.0,
            kpi_number=0.0,
            cars_open=6.0,
            cars_closed=4.0,
            cars_delayed=12.0,
            obs_open=3.0,
            obs_closed=9.0,
            obs_delayed=20.0,
            audit_delay=15.0,
            audits_recorded=2,
        )

    @pytest.mark.parametrize("kpi,achieved,number", [
        (95, 95.0, 95.0),
        ('95', 95.0, 95.0),
        ('95%', 95.0, 0.0),
        ('N/A', 0.0, 0.0),
    ])
    def test_kpi_read_two_ways(self, kpi, achieved, number):
        """KPI is read as a percentage and, separately, as a plain number."""
        metrics = to_metrics({'projectKPIsAchievedPercent': kpi})
        assert metrics.kpi_achieved == achieved
        assert metrics.kpi_number == number

    def test_only_project_audits_counted(self):
        """Client audit dates do not count as recorded audits."""
        record = {
            'projectAudit1': '2024-01-10',
            'projectAudit4': '2024-09-01',
            'clientAudit1': '2024-03-03',
            'clientAudit2': '2024-06-06',
        }
        assert to_metrics(record).audits_recorded == 2

    def test_empty_record(self):
        """Missing columns normalize to zero."""
        assert to_metrics({}) == ProjectMetrics()

    def test_non_mapping(self):
        """Non-mappings normalize to zero instead of raising."""
        assert to_metrics('row 7') == ProjectMetrics()

    def test_accepts_project_record(self):
        """ProjectRecord models are read through their aliases."""
        metrics = to_metrics(ProjectRecord(carsOpen='4', qualityBillabilityPercent='101%'))
        assert metrics.cars_open == 4.0
        assert metrics.billability == 101.0

    def test_metric_fields(self):
        """METRIC_FIELDS lists the dataclass fields in order."""
        assert METRIC_FIELDS[:4] == ('completion', 'billability', 'kpi_achieved', 'kpi_number')
        assert METRIC_FIELDS[-1] == 'audits_recorded'
