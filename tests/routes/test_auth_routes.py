from datetime import datetime, timedelta, timezone

import jwt

from reporting.auth.jwt_handler import Identity, create_access_token


JANE = {'name': 'Jane', 'studentId': '123456789', 'secret': 'abcdef', 'role': 'student'}


def test_register_student_returns_created_public_fields(client) -> None:
    response = client.post('/api/register', json=JANE)

    assert response.status_code == 201
    body = response.json()
    assert body['name'] == 'Jane'
    assert body['role'] == 'student'
    assert body['studentId'] == '123456789'
    assert isinstance(body['id'], int)
    assert 'password' not in body
    assert 'secret' not in body


def test_register_accepts_password_and_snake_case_student_id(client) -> None:
    response = client.post(
        '/api/register',
        json={'name': 'Lerato', 'student_id': '901019102', 'password': 'abcdef', 'role': 'student'},
    )

    assert response.status_code == 201
    assert response.json()['studentId'] == '901019102'


def test_register_rejects_short_student_id(client) -> None:
    response = client.post('/api/register', json={**JANE, 'studentId': '12345'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Student ID must be 9 digits (e.g., 901019102)'}


def test_register_rejects_non_institutional_email(client) -> None:
    response = client.post(
        '/api/register',
        json={'name': 'A', 'email': 'a@gmail.com', 'password': 'abcdef', 'role': 'lecturer'},
    )

    assert response.status_code == 400
    assert 'LUCT email' in response.json()['error']


def test_register_duplicate_student_id_is_bad_request(client) -> None:
    client.post('/api/register', json=JANE)

    response = client.post('/api/register', json=JANE)

    assert response.status_code == 400
    assert response.json() == {'error': 'Student ID already registered'}


def test_register_with_malformed_body_is_bad_request(client) -> None:
    response = client.post('/api/register', content='not json', headers={'Content-Type': 'application/json'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid JSON body'}


def test_register_rejects_non_ascii_digit_student_id(client) -> None:
    response = client.post('/api/register', json={**JANE, 'studentId': '١٢٣٤٥٦٧٨٩'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Student ID must be 9 digits (e.g., 901019102)'}


def test_login_returns_token_for_registered_student(client, token_settings) -> None:
    registered = client.post('/api/register', json=JANE).json()

    response = client.post('/api/login', json={'identifier': '123456789', 'secret': 'abcdef', 'role': 'student'})

    assert response.status_code == 200
    body = response.json()
    assert body['user'] == {
        'id': registered['id'],
        'name': 'Jane',
        'role': 'student',
        'email': None,
        'studentId': '123456789',
    }
    payload = jwt.decode(body['token'], token_settings.secret_key, algorithms=['HS256'])
    assert payload['role'] == 'student'
    assert payload['id'] == registered['id']


def test_login_missing_field_is_bad_request(client) -> None:
    response = client.post('/api/login', json={'identifier': '123456789', 'role': 'student'})

    assert response.status_code == 400
    assert response.json() == {'error': 'Identifier, password, and role are required'}


def test_login_wrong_password_and_unknown_user_look_the_same(client) -> None:
    client.post('/api/register', json=JANE)

    wrong_password = client.post('/api/login', json={'identifier': '123456789', 'password': 'nope-nope', 'role': 'student'})
    unknown_user = client.post('/api/login', json={'identifier': '111111111', 'password': 'abcdef', 'role': 'student'})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {'error': 'Invalid credentials'}


def test_profile_requires_token(client) -> None:
    response = client.get('/api/user/profile')

    assert response.status_code == 401
    assert response.json() == {'error': 'Access token required'}


def test_profile_treats_non_bearer_scheme_as_missing_token(client) -> None:
    response = client.get('/api/user/profile', headers={'Authorization': 'Token abc'})

    assert response.status_code == 401
    assert response.json() == {'error': 'Access token required'}


def test_profile_rejects_invalid_token(client) -> None:
    response = client.get('/api/user/profile', headers={'Authorization': 'Bearer not-a-token'})

    assert response.status_code == 403
    assert response.json() == {'error': 'Invalid or expired token'}


def test_profile_rejects_expired_token(client, token_settings) -> None:
    identity = Identity(id=1, name='Jane', role='student', student_id='123456789')
    issued_at = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
    token = create_access_token(identity, token_settings, now=issued_at)

    response = client.get('/api/user/profile', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 403


def test_profile_returns_identity_from_token(client) -> None:
    client.post('/api/register', json=JANE)
    token = client.post(
        '/api/login', json={'identifier': '123456789', 'password': 'abcdef', 'role': 'student'}
    ).json()['token']

    response = client.get('/api/user/profile', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 200
    assert response.json()['user']['name'] == 'Jane'
    assert response.json()['user']['role'] == 'student'


def test_health_check(client) -> None:
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.json()['status'] == 'ok'
