from sqlalchemy import func, or_
from app.extensions import db
from app.models import Document, DocumentEvent, User, Department, Division


class DocumentRepository:
    """Persistence calls for documents. Injected into WorkflowService."""

    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, document_id):
        return self.session.get(Document, document_id)

    def add(self, document):
        self.session.add(document)
        self.session.flush()
        return document

    def delete(self, document):
        self.session.delete(document)

    def add_event(self, event):
        self.session.add(event)

    def commit(self):
        self.session.commit()

    def rollback(self):
        self.session.rollback()

    def events_for(self, document_id):
        return (self.session.query(DocumentEvent)
                .filter_by(document_id=document_id)
                .order_by(DocumentEvent.id)
                .all())

    def find(self, department=None, status=None, owner_id=None):
        query = self.session.query(Document)
        if owner_id is not None:
            query = query.filter(Document.user_id == owner_id)
        if department:
            query = query.filter(or_(Document.target_department == department,
                                     Document.forwarded_from == department))
        if status:
            query = query.filter(func.lower(Document.status) == status.lower())
        return query.order_by(Document.id.desc()).all()

    def find_forwarded_from(self, department, status):
        return (self.session.query(Document)
                .filter(Document.forwarded_from == department,
                        Document.is_forwarded_request.is_(True),
                        Document.status == status,
                        Document.comments.isnot(None))
                .order_by(Document.id.desc())
                .all())

    def find_by_owner_affiliation(self, statuses, department=None, division=None):
        query = (self.session.query(Document)
                 .join(User, Document.user_id == User.id)
                 .filter(Document.status.in_(statuses)))
        if department:
            query = query.join(Department, User.department_id == Department.id).filter(Department.name == department)
        if division:
            query = query.join(Division, User.division_id == Division.id).filter(Division.name == division)
        return query.order_by(Document.id.desc()).all()
