APP = {
    'country': 'Germany',
    'university': 'TUM',
    'major': 'Informatics',
    'admission_fee': 75.0,
    'tuition_fee': 1500.25,
    'gre_needed': 'no',
    'language_test': 'IELTS 6.5',
    'application_route': 'uni-assist',
    'start_date': '2024-10-01',
    'end_date': '2025-05-31',
    'portal_link': 'https://portal.example',
    'username': 'me',
    'password': 'portal-pass',
}


def _create(client, user_id, **overrides):
    r = client.post('/api/masters-apps', json={**APP, 'user_id': user_id, **overrides})
    assert r.status_code == 200, r.json()
    return r.json()['id']


def test_list_orders_by_deadline(client):
    for end in ('2025-06-01', '2024-01-01', '2026-12-31'):
        _create(client, 1, end_date=end)
    rows = client.get('/api/masters-apps', params={'user_id': 1}).json()
    assert [r['end_date'] for r in rows] == ['2024-01-01', '2025-06-01', '2026-12-31']


def test_defaults_and_stored_values(client):
    _create(client, 3)
    row = client.get('/api/masters-apps', params={'user_id': 3}).json()[0]
    assert row['priority'] == 'medium'
    assert row['application_status'] == 'pending'
    assert row['account_created'] == 0
    assert row['tuition_fee'] == 1500.25
    # portal credentials are kept as entered
    assert row['password'] == 'portal-pass'


def test_account_created_accepts_boolean(client):
    _create(client, 1, account_created=True)
    row = client.get('/api/masters-apps', params={'user_id': 1}).json()[0]
    assert row['account_created'] == 1


def test_open_status_values_accepted(client):
    aid = _create(client, 1)
    r = client.put(f'/api/masters-apps/{aid}', json={**APP, 'application_status': 'waitlisted-maybe', 'priority': 'urgent'})
    assert r.json() == {'updated': True}
    row = client.get('/api/masters-apps', params={'user_id': 1}).json()[0]
    assert row['application_status'] == 'waitlisted-maybe'
    assert row['priority'] == 'urgent'


def test_missing_end_date_returns_error(client):
    body = {**APP, 'user_id': 1}
    body.pop('end_date')
    r = client.post('/api/masters-apps', json=body)
    assert 'end_date' in r.json()['error']


def test_scoped_to_user_and_delete(client):
    mine = _create(client, 1)
    _create(client, 2)
    assert [r['id'] for r in client.get('/api/masters-apps', params={'user_id': 1}).json()] == [mine]
    assert client.delete(f'/api/masters-apps/{mine}').json() == {'deleted': True}
    assert client.get('/api/masters-apps', params={'user_id': 1}).json() == []
    assert client.delete('/api/masters-apps/12345').json() == {'deleted': True}
