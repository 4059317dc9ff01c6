"""Record validation utilities."""
from typing import Any, Iterable, List, Mapping
import logging

from qhse_risk.transformers.metric_normalizer import is_missing

logger = logging.getLogger(__name__)

IDENTITY_FIELDS = ('projectNo', 'projectTitle')

# Values the register writes into identity columns for placeholder rows
PLACEHOLDER_IDENTITIES = frozenset({'Untitled Project'})


def as_record(project: Any) -> Mapping[str, Any]:
    """
    View a project as a backend-keyed mapping.

    Pydantic models (ProjectRecord) are dumped with their camelCase
    aliases; mappings are returned unchanged; anything else yields an
    empty mapping.
    """
    if isinstance(project, Mapping):
        return project
    model_dump = getattr(project, 'model_dump', None)
    if callable(model_dump):
        return model_dump(by_alias=True)
    return {}


def has_valid_identity(project: Any) -> bool:
    """
    Check that a record identifies a project.

    A record is valid when projectNo or projectTitle holds a real value
    (not blank, not 'N/A', not a placeholder title).

    Args:
        project: Raw project mapping or ProjectRecord

    Returns:
        True if the record takes part in classification and detection
    """
    record = as_record(project)
    for field in IDENTITY_FIELDS:
        value = record.get(field)
        if is_missing(value):
            continue
        if str(value).strip() in PLACEHOLDER_IDENTITIES:
            continue
        return True
    return False


def filter_valid_projects(projects: Iterable[Any]) -> List[Mapping[str, Any]]:
    """
    Drop records without project identity.

    Args:
        projects: Raw project mappings or ProjectRecord models

    Returns:
        Valid records as mappings, in input order
    """
    valid = []
    skipped = 0
    for project in projects or []:
        if has_valid_identity(project):
            valid.append(as_record(project))
        else:
            skipped += 1

    if skipped:
        logger.debug(f'Excluded {skipped} records without projectNo/projectTitle')
    return valid
