import base64
from datetime import datetime
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from app.extensions import db
from app.constants import DocumentStatus, UserStatus


class Department(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)

    divisions = db.relationship('Division', backref='department', lazy=True, cascade='all, delete-orphan')


class Division(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    department_id = db.Column(db.Integer, db.ForeignKey('department.id'), nullable=False)

    __table_args__ = (
        db.UniqueConstraint('name', 'department_id', name='uq_division_department'),
    )


class User(UserMixin, db.Model):
    id = db.Column(db.Integer, primary_key=True)
    id_number = db.Column(db.String(50))
    full_name = db.Column(db.String(150), nullable=False)
    gender = db.Column(db.String(20))
    email = db.Column(db.String(120))
    username = db.Column(db.String(64), unique=True, nullable=False)
    password_hash = db.Column(db.String(256))
    role = db.Column(db.String(30), nullable=False)
    department_id = db.Column(db.Integer, db.ForeignKey('department.id'))
    division_id = db.Column(db.Integer, db.ForeignKey('division.id'))
    status = db.Column(db.String(10), default=UserStatus.ACTIVE, nullable=False)
    pre_assigned_role = db.Column(db.String(20))  # Recorder / Releaser

    department = db.relationship('Department', foreign_keys=[department_id])
    division = db.relationship('Division', foreign_keys=[division_id])

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    @property
    def is_active(self):
        return self.status == UserStatus.ACTIVE

    @property
    def department_name(self):
        return self.department.name if self.department else None

    @property
    def division_name(self):
        return self.division.name if self.division else None

    def to_dict(self):
        return {
            'User_Id': self.id,
            'ID_Number': self.id_number,
            'Full_Name': self.full_name,
            'Gender': self.gender,
            'Email': self.email,
            'Department': self.department_name,
            'Division': self.division_name,
            'User_Role': self.role,
            'User_Name': self.username,
            'Status': self.is_active,
            'pre_assigned_role': self.pre_assigned_role,
        }


class Document(db.Model):
    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(100), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    status = db.Column(db.String(20), default=DocumentStatus.PENDING, nullable=False)
    priority = db.Column(db.String(10), nullable=False)
    content = db.Column(db.LargeBinary)
    description = db.Column(db.Text)

    # Routing & provenance
    target_department = db.Column(db.String(100))
    forwarded_from = db.Column(db.String(100))
    forwarded_by_admin = db.Column(db.String(150))
    is_forwarded_request = db.Column(db.Boolean, default=False, nullable=False)
    comments = db.Column(db.Text)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Bumped on every UPDATE; a stale write raises StaleDataError
    version = db.Column(db.Integer, nullable=False)

    owner = db.relationship('User', backref=db.backref('documents', lazy='dynamic'))
    events = db.relationship('DocumentEvent', backref='document', lazy=True,
                             cascade='all, delete-orphan', order_by='DocumentEvent.id')

    __mapper_args__ = {'version_id_col': version}

    def to_dict(self):
        owner = self.owner
        return {
            'Document_Id': self.id,
            'Type': self.type,
            'User_Id': self.user_id,
            'Status': self.status,
            'Priority': self.priority,
            'Document': base64.b64encode(self.content).decode('ascii') if self.content else None,
            'description': self.description,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
            'sender_name': owner.full_name if owner else None,
            'sender_department': owner.department_name if owner else None,
            'sender_division': owner.division_name if owner else None,
            'target_department': self.target_department,
            'comments': self.comments,
            'forwarded_from': self.forwarded_from,
            'forwarded_by_admin': self.forwarded_by_admin,
            'is_forwarded_request': self.is_forwarded_request,
            'version': self.version,
        }


class DocumentEvent(db.Model):
    """Audit trail of workflow actions (no comment text)."""
    id = db.Column(db.Integer, primary_key=True)
    document_id = db.Column(db.Integer, db.ForeignKey('document.id'), nullable=False)
    actor = db.Column(db.String(150))
    action = db.Column(db.String(30), nullable=False)
    from_status = db.Column(db.String(20))
    to_status = db.Column(db.String(20))
    department = db.Column(db.String(100))
    timestamp = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'Event_Id': self.id,
            'Document_Id': self.document_id,
            'actor': self.actor,
            'action': self.action,
            'from_status': self.from_status,
            'to_status': self.to_status,
            'department': self.department,
            'timestamp': self.timestamp.isoformat() if self.timestamp else None,
        }
