from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict
from wtforms import StringField, PasswordField, IntegerField, BooleanField
from wtforms.validators import DataRequired, Email, AnyOf, Optional
from app.constants import Priority, Role, SubRole
from app.errors import ValidationError


def _required(field_name):
    return DataRequired(message=f"Missing required field: {field_name}")


def _one_of(values, label):
    return AnyOf(values, message=f"Invalid {label}. Must be one of: {', '.join(values)}")


# --- JSON -> FORM BOUNDARY ---

def load_form(form_class, payload=None):
    """
    Validates a JSON body against ``form_class`` and returns the bound form.
    Unknown keys are ignored and nulls count as absent. Raises ValidationError
    carrying the first field error.
    """
    if payload is None:
        payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    formdata = MultiDict()
    for key, value in payload.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = 'true' if value else 'false'
        elif not isinstance(value, str):
            value = str(value)
        formdata.add(key, value)

    form = form_class(formdata=formdata)
    if not form.validate():
        raise ValidationError(first_error(form))
    return form


def first_error(form):
    for field in form:
        if field.errors:
            return field.errors[0]
    return "Invalid request"


def was_sent(field):
    """True when the client included the key, even with an empty value."""
    return bool(field.raw_data)


# --- AUTH FORMS ---

class LoginForm(FlaskForm):
    username = StringField('Username', validators=[DataRequired(message="Username and password are required")])
    password = PasswordField('Password', validators=[DataRequired(message="Username and password are required")])


# --- DOCUMENT FORMS ---

class DocumentCreateForm(FlaskForm):
    Type = StringField('Type', validators=[_required('Type')])
    Priority = StringField('Priority', validators=[_required('Priority'), _one_of(Priority.ALL, 'Priority')])
    User_Id = IntegerField('User Id', validators=[Optional()])
    # Lets older clients identify the owner by full name
    sender_name = StringField('Sender Name')
    Document = StringField('Document')  # base64 payload
    description = StringField('Description')
    target_department = StringField('Target Department')


class DocumentUpdateForm(FlaskForm):
    Document_Id = IntegerField('Document Id', validators=[DataRequired(message="Document_Id is required")])
    # Any casing; canonicalized by the workflow service
    Status = StringField('Status')
    Priority = StringField('Priority', validators=[Optional(), _one_of(Priority.ALL, 'Priority')])
    Type = StringField('Type')
    description = StringField('Description')
    Document = StringField('Document')
    comments = StringField('Comments')
    admin = StringField('Admin')
    version = IntegerField('Version', validators=[Optional()])


class ForwardForm(FlaskForm):
    documentId = IntegerField('Document Id', validators=[DataRequired(message="documentId is required")])
    targetDepartment = StringField('Target Department', validators=[DataRequired(message="targetDepartment is required")])
    notes = StringField('Notes')
    forwarderDepartment = StringField('Forwarder Department')
    forwarderName = StringField('Forwarder Name')


class RespondForm(FlaskForm):
    responderDepartment = StringField('Responder Department')
    responderName = StringField('Responder Name')
    message = StringField('Message', validators=[DataRequired(message="Response message is required")])


class ActorForm(FlaskForm):
    admin = StringField('Admin')


# --- DIRECTORY FORMS ---

class DepartmentForm(FlaskForm):
    Department = StringField('Department', validators=[DataRequired(message="Missing or invalid Department")])


class DivisionForm(FlaskForm):
    Division = StringField('Division', validators=[DataRequired(message="Missing or invalid Division")])
    Department = StringField('Department', validators=[DataRequired(message="Missing Department for Division")])


# --- USER FORMS ---

ACTIVE_FALSE_VALUES = ('false', '0', '', 'inactive')


class UserCreateForm(FlaskForm):
    ID_Number = StringField('ID Number', validators=[_required('ID_Number')])
    Full_Name = StringField('Full Name', validators=[_required('Full_Name')])
    Gender = StringField('Gender', validators=[_required('Gender')])
    Email = StringField('Email', validators=[_required('Email'), Email(message="Invalid Email")])
    Department = StringField('Department', validators=[_required('Department')])
    Division = StringField('Division', validators=[_required('Division')])
    User_Role = StringField('Role', validators=[_required('User_Role'), _one_of(Role.ALL, 'User_Role')])
    User_Name = StringField('Username', validators=[_required('User_Name')])
    Password = PasswordField('Password', validators=[_required('Password')])
    Status = BooleanField('Active', false_values=ACTIVE_FALSE_VALUES)
    pre_assigned_role = StringField('Pre-assigned Role', validators=[
        Optional(), _one_of((SubRole.RECORDER, SubRole.RELEASER), 'pre_assigned_role')
    ])


class UserUpdateForm(FlaskForm):
    Full_Name = StringField('Full Name')
    Gender = StringField('Gender')
    Email = StringField('Email', validators=[Optional(), Email(message="Invalid Email")])
    Department = StringField('Department')
    Division = StringField('Division')
    User_Role = StringField('Role', validators=[Optional(), _one_of(Role.ALL, 'User_Role')])
    Password = PasswordField('Password')
    Status = BooleanField('Active', false_values=ACTIVE_FALSE_VALUES)
    pre_assigned_role = StringField('Pre-assigned Role', validators=[
        Optional(), _one_of((SubRole.RECORDER, SubRole.RELEASER), 'pre_assigned_role')
    ])
