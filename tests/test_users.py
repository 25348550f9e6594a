from app.constants import Role, SubRole


def _new_user_payload(**overrides):
    payload = {
        'ID_Number': 'EMP-100',
        'Full_Name': 'Maria Santos',
        'Gender': 'F',
        'Email': 'Maria.Santos@Example.com',
        'Department': 'Finance',
        'Division': 'Accounting',
        'User_Role': Role.EMPLOYEE,
        'User_Name': 'msantos',
        'Password': 'welcome1',
    }
    payload.update(overrides)
    return payload


def test_create_user(client, directory):
    resp = client.post('/api/users', json=_new_user_payload(pre_assigned_role=SubRole.RECORDER))
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['User_Name'] == 'msantos'
    assert body['Email'] == 'maria.santos@example.com'
    assert body['Department'] == 'Finance'
    assert body['Division'] == 'Accounting'
    assert body['Status'] is True
    assert body['pre_assigned_role'] == SubRole.RECORDER

    login = client.post('/api/login', json={'username': 'msantos', 'password': 'welcome1'})
    assert login.get_json()['Default_Route'] == '/records'


def test_create_inactive_user(client, directory):
    resp = client.post('/api/users', json=_new_user_payload(Status=False))
    assert resp.get_json()['Status'] is False


def test_create_user_duplicate_username(client, directory):
    client.post('/api/users', json=_new_user_payload())
    resp = client.post('/api/users', json=_new_user_payload(ID_Number='EMP-101'))
    assert resp.status_code == 409


def test_create_user_missing_field(client, directory):
    payload = _new_user_payload()
    del payload['Full_Name']
    resp = client.post('/api/users', json=payload)
    assert resp.status_code == 400
    assert resp.get_json()['error'] == 'Missing required field: Full_Name'


def test_create_user_bad_role(client, directory):
    resp = client.post('/api/users', json=_new_user_payload(User_Role='Janitor'))
    assert resp.status_code == 400


def test_create_user_division_outside_department(client, directory):
    resp = client.post('/api/users', json=_new_user_payload(Division='Recruitment'))
    assert resp.status_code == 400


def test_list_users_filters(client, employee, hr_admin):
    everyone = client.get('/api/users').get_json()
    assert {u['User_Name'] for u in everyone} == {'jane_doe', 'hr_admin'}

    admins = client.get('/api/users?role=Admin').get_json()
    assert [u['User_Name'] for u in admins] == ['hr_admin']

    finance = client.get('/api/users?department=Finance').get_json()
    assert [u['User_Name'] for u in finance] == ['jane_doe']


def test_update_user(client, employee):
    resp = client.put(f'/api/users/{employee.id}', json={
        'User_Role': Role.RELEASER,
        'Department': 'Records Office',
        'Division': 'Incoming',
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['User_Role'] == Role.RELEASER
    assert body['Department'] == 'Records Office'
    assert body['Full_Name'] == 'Jane Doe'


def test_deactivate_user_blocks_login(client, employee):
    client.put(f'/api/users/{employee.id}', json={'Status': False})
    resp = client.post('/api/login', json={'username': 'jane_doe', 'password': 'secret123'})
    assert resp.status_code == 401


def test_update_password(client, employee):
    client.put(f'/api/users/{employee.id}', json={'Password': 'changed!'})
    resp = client.post('/api/login', json={'username': 'jane_doe', 'password': 'changed!'})
    assert resp.status_code == 200


def test_update_missing_user(client, directory):
    assert client.put('/api/users/404', json={'Full_Name': 'Nobody'}).status_code == 404


def test_delete_user(client, make_user):
    user = make_user('temp_worker')
    resp = client.delete(f'/api/users/{user.id}')
    assert resp.status_code == 200
    assert client.delete(f'/api/users/{user.id}').status_code == 404


def test_delete_superadmin_refused(client, make_user):
    boss = make_user('boss', role=Role.SUPER_ADMIN)
    assert client.delete(f'/api/users/{boss.id}').status_code == 409


def test_delete_document_owner_refused(client, new_document, employee):
    new_document()
    assert client.delete(f'/api/users/{employee.id}').status_code == 409
