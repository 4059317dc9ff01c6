"""Unit tests for the risk classifier."""
import pytest

from qhse_risk.classifiers.risk_classifier import (
    ClassifiedProject,
    RiskClassifier,
    classify,
    filter_by_risk,
    kpi_status,
)
from qhse_risk.config.rules import Condition, RiskRule
from qhse_risk.schemas import KPIStatus, ProjectRecord, RiskFilter, RiskTier

TIER_RANK = {RiskTier.LOW: 0, RiskTier.MEDIUM: 1, RiskTier.HIGH: 2, RiskTier.CRITICAL: 3}


class TestClassify:
    """Test single-project classification."""

    def test_open_cars_is_critical(self):
        """Three open CARs are enough for CRITICAL."""
        project = {
            'carsOpen': 3,
            'obsOpen': 0,
            'projectCompletionPercent': '50%',
            'qualityBillabilityPercent': '80%',
            'delayInAuditsNoDays': 0,
        }
        assert classify(project) == RiskTier.CRITICAL

    def test_low_kpi_is_high(self):
        """KPI below 70 with nothing worse is HIGH."""
        project = {
            'carsOpen': 0,
            'obsOpen': 0,
            'projectCompletionPercent': '95%',
            'qualityBillabilityPercent': '80%',
            'projectKPIsAchievedPercent': 65,
            'delayInAuditsNoDays': 0,
        }
        assert classify(project) == RiskTier.HIGH

    def test_sub_optimal_billability_is_medium(self, medium_project):
        """Billability below 70 is MEDIUM."""
        assert classify(medium_project) == RiskTier.MEDIUM

    def test_healthy_project_is_low(self, healthy_project):
        """No rule matching falls through to LOW."""
        assert classify(healthy_project) == RiskTier.LOW

    def test_critical_fixture(self, critical_project):
        """Six open CARs classify CRITICAL."""
        assert classify(critical_project) == RiskTier.CRITICAL

    @pytest.mark.parametrize("overrides", [
        {'obsOpen': 5},
        {'delayInAuditsNoDays': '30'},
        {'projectCompletionPercent': '80%', 'carsOpen': 1},
        {'qualityBillabilityPercent': '29%', 'projectCompletionPercent': '51%'},
        {'carsDelayedClosingNoDays': 45},
        {'obsDelayedClosingNoDays': '60'},
    ])
    def test_critical_clauses(self, healthy_project, overrides):
        """Each CRITICAL clause escalates an otherwise healthy project."""
        project = {**healthy_project, **overrides}
        assert classify(project) == RiskTier.CRITICAL

    @pytest.mark.parametrize("overrides", [
        {'obsOpen': 2},
        {'delayInAuditsNoDays': 1},
        {'qualityBillabilityPercent': '49%'},
        {'carsDelayedClosingNoDays': 3},
        {'obsDelayedClosingNoDays': 1},
        {'projectCompletionPercent': '90%', 'obsOpen': 1},
    ])
    def test_high_clauses(self, healthy_project, overrides):
        """Each HIGH clause escalates an otherwise healthy project."""
        project = {**healthy_project, **overrides}
        assert classify(project) == RiskTier.HIGH

    @pytest.mark.parametrize("overrides", [
        {'projectKPIsAchievedPercent': 84},
        {'projectKPIsAchievedPercent': '70'},
        {'qualityBillabilityPercent': '69%'},
    ])
    def test_medium_clauses(self, healthy_project, overrides):
        """MEDIUM clauses apply once nothing higher matches."""
        project = {**healthy_project, **overrides}
        assert classify(project) == RiskTier.MEDIUM

    def test_first_matching_tier_wins(self, healthy_project):
        """A project matching CRITICAL and MEDIUM rules is CRITICAL."""
        project = {**healthy_project, 'carsOpen': 4, 'qualityBillabilityPercent': '65%'}
        assert classify(project) == RiskTier.CRITICAL

    @pytest.mark.parametrize("kpi", ['95%', '90%'])
    def test_kpi_read_as_plain_number(self, healthy_project, kpi):
        """A '%'-suffixed KPI is not a number and reads as 0, which is HIGH."""
        project = {**healthy_project, 'projectKPIsAchievedPercent': kpi}
        assert classify(project) == RiskTier.HIGH

    @pytest.mark.parametrize("kpi", [95, '95', 85.0])
    def test_numeric_kpi_stays_low(self, healthy_project, kpi):
        """Numeric KPI values at or above 85 raise nothing."""
        project = {**healthy_project, 'projectKPIsAchievedPercent': kpi}
        assert classify(project) == RiskTier.LOW

    @pytest.mark.parametrize("project", [
        {},
        {'carsOpen': 'abc', 'obsOpen': None, 'projectCompletionPercent': '??'},
        {'projectNo': 'N/A', 'delayInAuditsNoDays': -4},
        'not a record',
        None,
    ])
    def test_total_over_garbage(self, project):
        """Classification never raises and always returns a tier."""
        assert classify(project) in set(RiskTier)

    def test_empty_record_is_high(self):
        """Missing billability normalizes to 0, which is below 50."""
        assert classify({}) == RiskTier.HIGH

    def test_accepts_project_record(self):
        """ProjectRecord models classify like their raw rows."""
        record = ProjectRecord(projectNo='P-7', carsOpen='3')
        assert classify(record) == RiskTier.CRITICAL

    def test_classification_ignores_identity(self):
        """Single-record classification does not filter on identity."""
        assert classify({'carsOpen': 3}) == RiskTier.CRITICAL


class TestMonotonicity:
    """Worsening one metric never lowers the tier."""

    @pytest.mark.parametrize("field,values", [
        ('carsOpen', [0, 1, 2, 3, 4, 8]),
        ('obsOpen', [0, 1, 2, 4, 5, 20]),
        ('delayInAuditsNoDays', [0, 1, 29, 30, 90]),
        ('carsDelayedClosingNoDays', [0, 1, 44, 45, 100]),
        ('obsDelayedClosingNoDays', [0, 1, 59, 60, 100]),
    ])
    def test_higher_is_never_better(self, healthy_project, field, values):
        """Tiers are non-decreasing as the metric grows."""
        tiers = [TIER_RANK[classify({**healthy_project, field: v})] for v in values]
        assert tiers == sorted(tiers)

    def test_third_open_car_escalates_to_critical(self):
        """With nothing else firing, 2 open CARs is HIGH and 3 is CRITICAL."""
        base = {
            'projectCompletionPercent': '50%',
            'qualityBillabilityPercent': '80%',
            'projectKPIsAchievedPercent': 90,
            'obsOpen': 0,
            'delayInAuditsNoDays': 0,
        }
        assert classify({**base, 'carsOpen': 2}) == RiskTier.HIGH
        assert classify({**base, 'carsOpen': 3}) == RiskTier.CRITICAL


class TestClassifyProjects:
    """Test batch classification."""

    def test_invalid_records_excluded(self, sample_projects):
        """Only records with projectNo or projectTitle are classified."""
        classified = RiskClassifier().classify_projects(sample_projects)
        assert [p.project_no for p in classified] == ['QP-1001', 'QP-1002', 'QP-1003']

    def test_display_serial_numbers(self, sample_projects):
        """Valid records are renumbered from 1 in input order."""
        classified = RiskClassifier().classify_projects(sample_projects)
        assert [p.display_sr_no for p in classified] == [1, 2, 3]

    def test_risk_levels(self, sample_projects):
        """Each classified project carries its tier."""
        classified = RiskClassifier().classify_projects(sample_projects)
        assert [p.risk_level for p in classified] == [
            RiskTier.CRITICAL, RiskTier.LOW, RiskTier.MEDIUM,
        ]

    def test_title_only_record_is_valid(self):
        """A title without a project number is enough."""
        classified = RiskClassifier().classify_projects([{'projectTitle': 'Pipeline Spur'}])
        assert len(classified) == 1
        assert classified[0].project_title == 'Pipeline Spur'

    def test_empty_input(self):
        """No records yield no classified projects."""
        assert RiskClassifier().classify_projects([]) == []
        assert RiskClassifier().classify_projects(None) == []

    def test_custom_rules(self):
        """The rule table is data and can be replaced."""
        rules = [RiskRule(RiskTier.CRITICAL, ((Condition('completion', '<', 10),),))]
        classifier = RiskClassifier(rules=rules, default_tier=RiskTier.MEDIUM)
        assert classifier.classify({'projectCompletionPercent': '5%'}) == RiskTier.CRITICAL
        assert classifier.classify({'projectCompletionPercent': '50%'}) == RiskTier.MEDIUM


class TestFilterByRisk:
    """Test dashboard risk filters."""

    @pytest.fixture
    def classified(self, sample_projects):
        return RiskClassifier().classify_projects(sample_projects)

    @pytest.mark.parametrize("risk_filter,expected", [
        (RiskFilter.ALL, ['QP-1001', 'QP-1002', 'QP-1003']),
        (RiskFilter.CRITICAL, ['QP-1001']),
        (RiskFilter.HIGH_RISK, ['QP-1001']),
        (RiskFilter.MEDIUM_RISK, ['QP-1003']),
        (RiskFilter.ON_TRACK, ['QP-1002']),
        ('ON_TRACK', ['QP-1002']),
    ])
    def test_filters(self, classified, risk_filter, expected):
        """Filters select tiers and keep input order."""
        assert [p.project_no for p in filter_by_risk(classified, risk_filter)] == expected

    def test_high_risk_includes_high(self, healthy_project):
        """HIGH_RISK covers HIGH as well as CRITICAL."""
        project = {**healthy_project, 'obsOpen': 2}
        classified = RiskClassifier().classify_projects([project])
        assert filter_by_risk(classified, RiskFilter.HIGH_RISK) == classified

    def test_unknown_filter_raises(self, classified):
        """An unknown filter is rejected."""
        with pytest.raises(ValueError, match='Unknown risk filter'):
            filter_by_risk(classified, 'URGENT')

    def test_returns_classified_projects(self, classified):
        """Filtered items are the ClassifiedProject objects themselves."""
        result = filter_by_risk(classified)
        assert all(isinstance(p, ClassifiedProject) for p in result)


class TestKpiStatus:
    """Test KPI traffic-light status."""

    @pytest.mark.parametrize("value,expected", [
        ('92%', KPIStatus.GREEN),
        (90, KPIStatus.GREEN),
        ('89.9', KPIStatus.YELLOW),
        ('70%', KPIStatus.YELLOW),
        ('69%', KPIStatus.RED),
        ('N/A', KPIStatus.RED),
    ])
    def test_status(self, value, expected):
        """Green from 90, yellow from 70, red below."""
        assert kpi_status(value) == expected
