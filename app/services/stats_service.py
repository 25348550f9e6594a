from datetime import datetime
from sqlalchemy import extract, func
from app.extensions import db
from app.models import Document
from app.constants import DocumentStatus, Role
from app.services.directory_service import normalize_role

# Keys reported on the dashboard, in display order
DASHBOARD_STATUSES = (
    DocumentStatus.PENDING,
    DocumentStatus.APPROVED,
    DocumentStatus.REVISION,
    DocumentStatus.RELEASED,
    DocumentStatus.RECEIVED,
)


def _scoped_query(user_id=None, role=None, department=None):
    """Admins (and heads) see their department's inbox; employees see their own."""
    role = normalize_role(role)
    query = db.session.query(Document)
    if role == Role.EMPLOYEE and user_id is not None:
        query = query.filter(Document.user_id == user_id)
    elif role != Role.SUPER_ADMIN and department:
        query = query.filter(Document.target_department == department)
    return query


def get_dashboard_stats(user_id=None, role=None, department=None):
    """Calculates document counts for the dashboard cards."""
    query = _scoped_query(user_id, role, department)
    counts = dict(
        query.with_entities(Document.status, func.count(Document.id))
        .group_by(Document.status)
        .all()
    )
    stats = {'total': sum(counts.values())}
    for status in DASHBOARD_STATUSES:
        stats[status.lower()] = counts.get(status, 0)
    return stats


def get_monthly_totals(year=None, user_id=None, role=None, department=None):
    """Documents created per month of ``year``; always twelve entries."""
    year = year or datetime.utcnow().year
    month = extract('month', Document.created_at)
    rows = (
        _scoped_query(user_id, role, department)
        .filter(extract('year', Document.created_at) == year)
        .with_entities(month, func.count(Document.id))
        .group_by(month)
        .all()
    )
    per_month = {int(m): total for m, total in rows}
    return [{'month': m, 'total': per_month.get(m, 0)} for m in range(1, 13)]
