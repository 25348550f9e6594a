class DocumentStatus:
    """Lifecycle states of a submitted document."""
    PENDING = 'Pending'
    APPROVED = 'Approved'
    REVISION = 'Revision'
    RELEASED = 'Released'
    RECEIVED = 'Received'

    # End state
    ARCHIVED = 'Archived'

    ALL = (PENDING, APPROVED, REVISION, RELEASED, RECEIVED, ARCHIVED)


# Allowed (from -> to) moves. Keeping the same status is an in-place edit,
# not a transition, and is handled by the workflow service.
ALLOWED_TRANSITIONS = {
    DocumentStatus.PENDING: {DocumentStatus.APPROVED, DocumentStatus.REVISION, DocumentStatus.RECEIVED},
    DocumentStatus.APPROVED: {DocumentStatus.RELEASED, DocumentStatus.RECEIVED},
    DocumentStatus.REVISION: {DocumentStatus.PENDING, DocumentStatus.RECEIVED},
    DocumentStatus.RELEASED: {DocumentStatus.RECEIVED},
    DocumentStatus.RECEIVED: {DocumentStatus.ARCHIVED},
    DocumentStatus.ARCHIVED: set(),
}


class Priority:
    HIGH = 'High'
    MEDIUM = 'Medium'
    LOW = 'Low'

    ALL = (HIGH, MEDIUM, LOW)


class Role:
    """User roles for permissions."""
    SUPER_ADMIN = 'SuperAdmin'
    ADMIN = 'Admin'
    EMPLOYEE = 'Employee'
    DEPARTMENT_HEAD = 'DepartmentHead'
    DIVISION_HEAD = 'DivisionHead'
    OFFICER_IN_CHARGE = 'OfficerInCharge'
    RELEASER = 'Releaser'

    ALL = (SUPER_ADMIN, ADMIN, EMPLOYEE, DEPARTMENT_HEAD, DIVISION_HEAD, OFFICER_IN_CHARGE, RELEASER)
    HEADS = (DEPARTMENT_HEAD, DIVISION_HEAD, OFFICER_IN_CHARGE)


# Lower-cased spellings found in user rows -> canonical role
ROLE_ALIASES = {
    'superadmin': Role.SUPER_ADMIN,
    'admin': Role.ADMIN,
    'employee': Role.EMPLOYEE,
    'departmenthead': Role.DEPARTMENT_HEAD,
    'divisionhead': Role.DIVISION_HEAD,
    'officerincharge': Role.OFFICER_IN_CHARGE,
    'officer_in_charge': Role.OFFICER_IN_CHARGE,
    'oic': Role.OFFICER_IN_CHARGE,
    'releaser': Role.RELEASER,
}


class SubRole:
    """Pre-assigned employee sub-roles; they only pick the landing page."""
    RECORDER = 'Recorder'
    RELEASER = 'Releaser'


class UserStatus:
    ACTIVE = 'active'
    INACTIVE = 'inactive'
