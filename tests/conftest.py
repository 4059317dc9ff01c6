"""Pytest configuration and fixtures."""
import pytest
from typing import List, Dict, Any


@pytest.fixture
def critical_project() -> Dict[str, Any]:
    """Project with many open CARs and a long audit delay."""
    return {
        'srNo': 1,
        'projectNo': 'QP-1001',
        'projectTitle': 'Gas Compression Station',
        'client': 'ADNOC',
        'projectManager': 'R. Haddad',
        'projectCompletionPercent': '85%',
        'projectKPIsAchievedPercent': '55%',
        'qualityBillabilityPercent': '125%',
        'carsOpen': '6',
        'carsClosed': '4',
        'carsDelayedClosingNoDays': '12',
        'obsOpen': 3,
        'obsClosed': 9,
        'obsDelayedClosingNoDays': '20',
        'delayInAuditsNoDays': '15',
        'projectAudit1': '2024-03-01',
        'projectAudit2': '2024-06-01',
        'projectAudit3': '',
        'projectAudit4': 'N/A',
        'clientAudit1': '2024-04-15',
        'clientAudit2': None,
    }


@pytest.fixture
def healthy_project() -> Dict[str, Any]:
    """Project with no open findings and strong metrics."""
    return {
        'srNo': 2,
        'projectNo': 'QP-1002',
        'projectTitle': 'Water Treatment Upgrade',
        'client': 'DEWA',
        'projectManager': 'S. Iyer',
        'projectCompletionPercent': '100%',
        'projectKPIsAchievedPercent': 95,
        'qualityBillabilityPercent': '90%',
        'carsOpen': 0,
        'carsClosed': 2,
        'carsDelayedClosingNoDays': '',
        'obsOpen': 0,
        'obsClosed': 5,
        'obsDelayedClosingNoDays': 'N/A',
        'delayInAuditsNoDays': 0,
        'projectAudit1': '2024-02-10',
    }


@pytest.fixture
def medium_project() -> Dict[str, Any]:
    """Project whose only concern is sub-optimal billability."""
    return {
        'srNo': 3,
        'projectNo': 'QP-1003',
        'projectTitle': 'Substation Extension',
        'projectCompletionPercent': '80%',
        'projectKPIsAchievedPercent': 90,
        'qualityBillabilityPercent': '65%',
        'carsOpen': 0,
        'obsOpen': 0,
        'delayInAuditsNoDays': 0,
    }


@pytest.fixture
def invalid_projects() -> List[Dict[str, Any]]:
    """Rows without identity; must be ignored by batch operations."""
    return [
        {'carsOpen': 9, 'obsOpen': 12},
        {'projectNo': 'N/A', 'projectTitle': '', 'carsOpen': 7},
        {'projectNo': None, 'projectTitle': 'Untitled Project', 'delayInAuditsNoDays': 40},
    ]


@pytest.fixture
def sample_projects(critical_project, healthy_project, medium_project, invalid_projects) -> List[Dict[str, Any]]:
    """Mixed register extract, invalid rows included."""
    return [critical_project, invalid_projects[0], healthy_project, medium_project,
            invalid_projects[1], invalid_projects[2]]
