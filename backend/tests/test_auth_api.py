def test_register_then_login_returns_same_user(client):
    r = client.post('/api/auth/register', json={'name': 'A', 'email': 'a@x.com', 'password': 'pw'})
    assert r.status_code == 200
    assert r.json() == {'user': {'id': 1, 'name': 'A', 'email': 'a@x.com'}}
    r2 = client.post('/api/auth/login', json={'email': 'a@x.com', 'password': 'pw'})
    assert r2.status_code == 200
    assert r2.json() == r.json()


def test_duplicate_email_rejected_and_first_user_kept(client, register):
    register(name='First', email='dup@x.com', password='one')
    r = client.post('/api/auth/register', json={'name': 'Second', 'email': 'dup@x.com', 'password': 'two'})
    assert r.status_code == 409
    assert r.json() == {'error': 'Email already exists'}
    login = client.post('/api/auth/login', json={'email': 'dup@x.com', 'password': 'one'})
    assert login.json()['user']['name'] == 'First'


def test_wrong_password_never_returns_user(client, register):
    register(email='s@x.com', password='secret1')
    r = client.post('/api/auth/login', json={'email': 's@x.com', 'password': 'secret2'})
    assert r.status_code == 401
    assert r.json() == {'error': 'Invalid email or password'}
    assert 'user' not in r.json()


def test_unknown_email_gets_same_error(client):
    r = client.post('/api/auth/login', json={'email': 'ghost@x.com', 'password': 'pw'})
    assert r.json() == {'error': 'Invalid email or password'}


def test_password_never_echoed(client):
    r = client.post('/api/auth/register', json={'name': 'A', 'email': 'a@x.com', 'password': 'pw', 'phone': '123'})
    assert set(r.json()['user']) == {'id', 'name', 'email'}


def test_missing_register_field_is_error_body(client):
    r = client.post('/api/auth/register', json={'name': 'A', 'email': 'a@x.com'})
    assert r.status_code == 422
    assert 'password' in r.json()['error']
