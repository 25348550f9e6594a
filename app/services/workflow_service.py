import base64
import binascii
import logging
from sqlalchemy import func
from sqlalchemy.orm.exc import StaleDataError
from app.extensions import db
from app.models import Document, DocumentEvent, User
from app.constants import ALLOWED_TRANSITIONS, DocumentStatus, Priority, Role
from app.errors import ConflictError, InvalidTransitionError, NotFoundError, ValidationError
from app.services.directory_service import DirectoryService, normalize_role
from app.services.document_repository import DocumentRepository
from app.utils import notify_forwarded, notify_owner

logger = logging.getLogger(__name__)

# Audit action recorded for a status change
STATUS_ACTIONS = {
    DocumentStatus.PENDING: 'RESUBMITTED',
    DocumentStatus.APPROVED: 'APPROVED',
    DocumentStatus.REVISION: 'REVISION_REQUESTED',
    DocumentStatus.RELEASED: 'RELEASED',
    DocumentStatus.RECEIVED: 'FORWARDED',
    DocumentStatus.ARCHIVED: 'ARCHIVED',
}

# Owner gets an email for these decisions
OWNER_NOTIFY_STATUSES = (DocumentStatus.APPROVED, DocumentStatus.REVISION, DocumentStatus.RELEASED)


def decode_payload(encoded):
    """Decodes the base64 file payload sent by the client."""
    if not encoded:
        return None
    if ',' in encoded and encoded.startswith('data:'):
        # data:application/pdf;base64,<payload>
        encoded = encoded.split(',', 1)[1]
    try:
        return base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("Document must be a base64-encoded file")


def normalize_status(status):
    """Maps any casing of a status onto its canonical spelling."""
    if not status:
        return None
    for known in DocumentStatus.ALL:
        if known.lower() == str(status).strip().lower():
            return known
    raise ValidationError(f"Invalid Status. Must be one of: {', '.join(DocumentStatus.ALL)}")


class WorkflowService:
    """
    Document lifecycle engine. Every status write is checked against
    ALLOWED_TRANSITIONS and recorded as a DocumentEvent.
    """

    def __init__(self, repository=None, directory=None):
        self.repo = repository or DocumentRepository()
        self.directory = directory or DirectoryService

    # --- TRANSITIONS ---
    @staticmethod
    def can_transition(current, requested):
        if current == requested:
            return True
        return requested in ALLOWED_TRANSITIONS.get(current, set())

    def _move(self, document, new_status, actor=None, action=None, department=None):
        current = document.status
        if not self.can_transition(current, new_status):
            logger.warning("Rejected transition %s -> %s for document %s", current, new_status, document.id)
            raise InvalidTransitionError(current, new_status)

        document.status = new_status
        self._record(document, action or STATUS_ACTIONS[new_status], actor, current, new_status, department)
        if current != new_status:
            logger.info("Document %s moved %s -> %s", document.id, current, new_status)

    def _record(self, document, action, actor, from_status, to_status, department=None):
        self.repo.add_event(DocumentEvent(
            document_id=document.id,
            actor=actor,
            action=action,
            from_status=from_status,
            to_status=to_status,
            department=department,
        ))

    def _commit(self):
        try:
            self.repo.commit()
        except StaleDataError:
            self.repo.rollback()
            raise ConflictError("Document was changed by another request. Reload and try again.")

    def get_document(self, document_id):
        document = self.repo.get(document_id)
        if not document:
            raise NotFoundError("Document not found")
        return document

    # --- CREATE ---
    def create_document(self, doc_type, user_id, priority, content=None, description=None,
                        target_department=None, sender_name=None):
        if not doc_type:
            raise ValidationError("Missing required field: Type")
        if priority not in Priority.ALL:
            raise ValidationError(f"Invalid Priority. Must be one of: {', '.join(Priority.ALL)}")

        if not user_id and sender_name:
            owner = User.query.filter(func.lower(User.full_name) == sender_name.strip().lower()).first()
            user_id = owner.id if owner else None
        if not user_id:
            raise ValidationError("User_Id is required and must reference an existing user")

        owner = db.session.get(User, user_id)
        if not owner:
            raise ValidationError("User_Id not found")

        if target_department:
            if not self.directory.department_exists(target_department):
                raise ValidationError(f"Department not found: {target_department}")
        else:
            target_department = owner.department_name

        document = Document(
            type=doc_type,
            user_id=owner.id,
            priority=priority,
            status=DocumentStatus.PENDING,
            content=content,
            description=description,
            target_department=target_department,
            is_forwarded_request=False,
        )
        self.repo.add(document)
        self._record(document, 'CREATED', owner.full_name, None, DocumentStatus.PENDING, target_department)
        self._commit()
        logger.info("Document %s created by user %s for %s", document.id, owner.id, target_department)
        return document

    # --- UPDATE / STATUS ---
    def update_document(self, document_id, status=None, comments=None, actor=None, priority=None,
                        doc_type=None, description=None, content=None, expected_version=None):
        document = self.get_document(document_id)
        if expected_version is not None and document.version != expected_version:
            raise ConflictError("Document was changed by another request. Reload and try again.")

        previous_status = document.status
        status = normalize_status(status)
        if status == DocumentStatus.RECEIVED and previous_status != DocumentStatus.RECEIVED:
            # Custody changes only through forward(), which records provenance
            raise ValidationError("Use /api/forward to send a document to another department")

        changed = False

        if doc_type:
            document.type = doc_type
            changed = True
        if priority:
            if priority not in Priority.ALL:
                raise ValidationError(f"Invalid Priority. Must be one of: {', '.join(Priority.ALL)}")
            document.priority = priority
            changed = True
        if description is not None:
            document.description = description
            changed = True
        if content is not None:
            document.content = content
            changed = True
        if comments is not None:
            document.comments = comments
            changed = True

        if status:
            action = STATUS_ACTIONS[status] if status != previous_status else 'UPDATED'
            self._move(document, status, actor, action)
            changed = True
        elif changed:
            self._record(document, 'UPDATED', actor, previous_status, previous_status)

        if not changed:
            raise ValidationError("No fields to update")

        self._commit()
        if status in OWNER_NOTIFY_STATUSES and status != previous_status:
            notify_owner(document)
        return document

    def archive(self, document_id, actor=None):
        document = self.get_document(document_id)
        self._move(document, DocumentStatus.ARCHIVED, actor, 'ARCHIVED', document.target_department)
        self._commit()
        return document

    def release(self, document_id, actor=None):
        document = self.get_document(document_id)
        self._move(document, DocumentStatus.RELEASED, actor, 'RELEASED')
        self._commit()
        notify_owner(document)
        return document

    # --- FORWARD / RESPOND ---
    def forward(self, document_id, target_department, notes=None, forwarder_department=None,
                forwarder_name=None):
        document = self.get_document(document_id)
        if not self.directory.department_exists(target_department):
            raise ValidationError(f"Unknown target department: {target_department}")

        # Custody passes from whichever department held the document
        previous_department = document.target_department or forwarder_department

        self._move(document, DocumentStatus.RECEIVED, forwarder_name, 'FORWARDED', target_department)
        document.forwarded_from = previous_department
        document.forwarded_by_admin = forwarder_name
        document.is_forwarded_request = True
        document.target_department = target_department
        document.comments = notes
        self._commit()

        logger.info("Document %s forwarded from %s to %s", document.id, previous_department, target_department)
        notify_forwarded(document, self.directory.admins_of(target_department))
        return document

    def respond(self, document_id, responder_department, responder_name, message):
        if not message or not message.strip():
            raise ValidationError("Response message is required")

        document = self.get_document(document_id)
        self._move(document, DocumentStatus.ARCHIVED, responder_name, 'RESPONDED', responder_department)
        # Only the latest response survives; it lives in comments
        document.comments = message
        self._commit()

        return self._response_view(document, responder_department, responder_name)

    def _response_view(self, document, responder_department, responder_name):
        responded_on = document.updated_at or document.created_at
        return {
            'Response_Id': document.id,
            'Document_Id': document.id,
            'Responder_Department': responder_department or '',
            'Responder_Name': responder_name or '',
            'Response_Message': document.comments or '',
            'Response_Date': responded_on.date().isoformat() if responded_on else None,
        }

    def list_responses(self, department):
        """Responses to documents this department forwarded elsewhere."""
        if not department:
            raise ValidationError("department is required")

        responses = []
        for document in self.repo.find_forwarded_from(department, DocumentStatus.ARCHIVED):
            replies = [e for e in self.repo.events_for(document.id) if e.action == 'RESPONDED']
            latest = replies[-1] if replies else None
            responses.append(self._response_view(
                document,
                latest.department if latest and latest.department else document.target_department,
                latest.actor if latest else document.forwarded_by_admin,
            ))
        return responses

    # --- LISTING ---
    def list_documents(self, department=None, status=None, role=None, user_id=None):
        status = normalize_status(status)
        role = normalize_role(role)

        if role == Role.EMPLOYEE:
            if user_id is None:
                raise ValidationError("userId is required for Employee role")
            return self.repo.find(status=status, owner_id=user_id)
        if role == Role.SUPER_ADMIN:
            return self.repo.find(status=status)
        return self.repo.find(department=department, status=status)

    def list_releases(self, department=None, division=None, user_id=None):
        if user_id is not None and not department and not division:
            affiliation = self.directory.resolve_user(user_id)
            department, division = affiliation['department'], affiliation['division']
        return self.repo.find_by_owner_affiliation(
            (DocumentStatus.APPROVED, DocumentStatus.RELEASED), department, division)

    def history(self, document_id):
        self.get_document(document_id)
        return self.repo.events_for(document_id)

    # --- DELETE ---
    def delete_document(self, document_id):
        document = self.get_document(document_id)
        self.repo.delete(document)
        self.repo.commit()
        logger.info("Document %s deleted", document_id)
        return {'success': True}
