from flask import Blueprint, jsonify, request
from flask_login import current_user
from app.forms import (ActorForm, DocumentCreateForm, DocumentUpdateForm, ForwardForm, RespondForm,
                       load_form, was_sent)
from app.services.workflow_service import WorkflowService, decode_payload

documents_bp = Blueprint('documents', __name__)


def _actor(name=None):
    """Explicit actor name, else whoever is logged in."""
    if name:
        return name
    if current_user.is_authenticated:
        return current_user.full_name
    return None


def _documents_json(documents):
    return jsonify([d.to_dict() for d in documents])


# --- LISTING ---
@documents_bp.route('/documents', methods=['GET'])
def list_documents():
    documents = WorkflowService().list_documents(
        department=request.args.get('department'),
        status=request.args.get('status'),
        role=request.args.get('role'),
        user_id=request.args.get('userId', type=int),
    )
    return _documents_json(documents)


@documents_bp.route('/documents/releases', methods=['GET'])
def list_releases():
    documents = WorkflowService().list_releases(
        department=request.args.get('department'),
        division=request.args.get('division'),
        user_id=request.args.get('userId', type=int),
    )
    return _documents_json(documents)


@documents_bp.route('/documents/responses', methods=['GET'])
def list_responses():
    return jsonify(WorkflowService().list_responses(request.args.get('department')))


@documents_bp.route('/documents/<int:document_id>', methods=['GET'])
def get_document(document_id):
    return jsonify(WorkflowService().get_document(document_id).to_dict())


@documents_bp.route('/documents/<int:document_id>/history', methods=['GET'])
def document_history(document_id):
    return jsonify([e.to_dict() for e in WorkflowService().history(document_id)])


# --- CREATE / UPDATE / DELETE ---
@documents_bp.route('/documents', methods=['POST'])
def create_document():
    form = load_form(DocumentCreateForm)
    document = WorkflowService().create_document(
        doc_type=form.Type.data.strip(),
        user_id=form.User_Id.data,
        priority=form.Priority.data,
        content=decode_payload(form.Document.data),
        description=form.description.data,
        target_department=form.target_department.data,
        sender_name=form.sender_name.data,
    )
    return jsonify(document.to_dict()), 201


@documents_bp.route('/documents', methods=['PUT'])
def update_document():
    form = load_form(DocumentUpdateForm)
    document = WorkflowService().update_document(
        form.Document_Id.data,
        status=form.Status.data,
        comments=form.comments.data if was_sent(form.comments) else None,
        actor=_actor(form.admin.data),
        priority=form.Priority.data,
        doc_type=form.Type.data,
        description=form.description.data if was_sent(form.description) else None,
        content=decode_payload(form.Document.data),
        expected_version=form.version.data,
    )
    return jsonify(document.to_dict())


@documents_bp.route('/documents/<int:document_id>', methods=['DELETE'])
def delete_document(document_id):
    return jsonify(WorkflowService().delete_document(document_id))


# --- WORKFLOW ACTIONS ---
@documents_bp.route('/forward', methods=['POST'])
def forward_document():
    form = load_form(ForwardForm)
    document = WorkflowService().forward(
        form.documentId.data,
        form.targetDepartment.data.strip(),
        notes=form.notes.data,
        forwarder_department=form.forwarderDepartment.data,
        forwarder_name=_actor(form.forwarderName.data),
    )
    return jsonify(document.to_dict())


@documents_bp.route('/documents/<int:document_id>/respond', methods=['POST'])
def respond_to_document(document_id):
    form = load_form(RespondForm)
    response = WorkflowService().respond(
        document_id,
        form.responderDepartment.data,
        _actor(form.responderName.data),
        form.message.data,
    )
    return jsonify(response)


@documents_bp.route('/documents/<int:document_id>/archive', methods=['POST'])
def archive_document(document_id):
    form = load_form(ActorForm)
    return jsonify(WorkflowService().archive(document_id, actor=_actor(form.admin.data)).to_dict())


@documents_bp.route('/documents/<int:document_id>/release', methods=['POST'])
def release_document(document_id):
    form = load_form(ActorForm)
    return jsonify(WorkflowService().release(document_id, actor=_actor(form.admin.data)).to_dict())
