import re

import pytest

from partnerhub.errors import NotFoundError
from partnerhub.models.bureau import Bureau, Worker
from partnerhub.services.bureau import BureauService, generate_token

def test_generate_token_format():
    tokens = {generate_token() for _ in range(50)}
    assert len(tokens) == 50
    assert all(re.fullmatch(r'[0-9a-f]{32}', token) for token in tokens)

def test_add_bureau_sends_permanent_link(app, sent_emails):
    result = BureauService.add_bureau('Bureau Kaloum', 'president@example.com', city='Conakry')
    bureau = result['bureau']

    assert result['created'] is True
    assert result['email_sent'] is True
    assert len(bureau.token) == 32
    assert sent_emails[0]['to'] == 'president@example.com'
    assert f'https://partnerhub.test/syndicat/bureau/{bureau.token}' in sent_emails[0]['html_body']

def test_add_bureau_is_idempotent_per_president(app, sent_emails):
    first = BureauService.add_bureau('Bureau Kaloum', 'president@example.com')['bureau']
    second = BureauService.add_bureau('Bureau Kaloum bis', 'president@example.com')

    assert second['created'] is False
    assert second['bureau'].id == first.id
    assert second['bureau'].token == first.token
    assert Bureau.query.count() == 1
    assert len(sent_emails) == 2
    assert sent_emails[1]['subject'].startswith('Reminder')

def test_bureau_is_kept_when_email_fails(app, failing_email):
    result = BureauService.add_bureau('Bureau Matam', 'matam@example.com')

    assert result['created'] is True
    assert result['email_sent'] is False
    assert BureauService.resolve_token(result['bureau'].token)['bureau'].id == result['bureau'].id

def test_resend_link(app, sent_emails):
    bureau = BureauService.add_bureau('Bureau Dixinn', 'dixinn@example.com')['bureau']
    result = BureauService.resend_link('dixinn@example.com')

    assert result['email_sent'] is True
    assert bureau.token in sent_emails[-1]['html_body']

def test_resend_link_unknown_email(app, sent_emails):
    with pytest.raises(ValueError):
        BureauService.resend_link('nobody@example.com')
    assert sent_emails == []

def test_api_add_bureau(client, sent_emails):
    response = client.post('/api/v1/bureaus', json={'name': 'Bureau Ratoma', 'president_email': 'ratoma@example.com'})
    assert response.status_code == 201
    data = response.get_json()
    assert data['created'] is True
    assert data['bureau']['interface_url'].startswith('https://partnerhub.test/syndicat/bureau/')
    assert 'token' not in data['bureau']

    response = client.post('/api/v1/bureaus', json={'name': 'Bureau Ratoma', 'president_email': 'ratoma@example.com'})
    assert response.status_code == 200
    assert response.get_json()['created'] is False

def test_api_add_bureau_requires_fields(client):
    response = client.post('/api/v1/bureaus', json={'name': 'Bureau Ratoma'})
    assert response.status_code == 400
    assert 'president_email' in response.get_json()['error']

def test_api_resend_link(client, sent_emails):
    client.post('/api/v1/bureaus', json={'name': 'Bureau Ratoma', 'president_email': 'ratoma@example.com'})
    response = client.post('/api/v1/bureaus/resend-link', json={'email': 'ratoma@example.com'})
    assert response.status_code == 200
    assert response.get_json()['email_sent'] is True

@pytest.fixture
def bureau(app, sent_emails):
    bureau = BureauService.add_bureau('Bureau Kaloum', 'president@example.com', city='Conakry')['bureau']
    sent_emails.clear()
    return bureau

def test_add_worker_sends_its_own_link(app, bureau, sent_emails):
    result = BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com', access_level='full')
    worker = result['worker']

    assert result['created'] is True
    assert result['email_sent'] is True
    assert re.fullmatch(r'[0-9a-f]{32}', worker.token)
    assert worker.token != bureau.token
    assert sent_emails[0]['to'] == 'alpha@example.com'
    assert f'https://partnerhub.test/syndicat/travailleur/{worker.token}' in sent_emails[0]['html_body']
    assert 'Bureau Kaloum' in sent_emails[0]['subject']

def test_add_worker_is_idempotent_per_bureau(app, bureau, sent_emails):
    first = BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com')['worker']
    second = BureauService.add_worker(bureau.id, 'Alpha D.', 'alpha@example.com')

    assert second['created'] is False
    assert second['worker'].id == first.id
    assert Worker.query.count() == 1
    assert sent_emails[1]['subject'].startswith('Reminder')

def test_add_worker_validation(app, bureau):
    with pytest.raises(NotFoundError):
        BureauService.add_worker(999, 'Alpha Diallo', 'alpha@example.com')
    with pytest.raises(ValueError):
        BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com', access_level='admin')
    assert Worker.query.count() == 0

def test_worker_is_kept_when_email_fails(app, bureau, failing_email):
    result = BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com')
    assert result['created'] is True
    assert result['email_sent'] is False
    assert Worker.query.count() == 1

def test_list_bureaus_and_workers(app, bureau, sent_emails):
    other = BureauService.add_bureau('Bureau Matam', 'matam@example.com')['bureau']
    BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com')
    BureauService.add_worker(bureau.id, 'Mariama Bah', 'mariama@example.com')
    BureauService.add_worker(other.id, 'Sekou Camara', 'sekou@example.com')

    assert {b.id for b in BureauService.list_bureaus()} == {bureau.id, other.id}
    assert len(BureauService.list_workers()) == 3
    assert {w.name for w in BureauService.list_workers(bureau.id)} == {'Alpha Diallo', 'Mariama Bah'}
    with pytest.raises(NotFoundError):
        BureauService.list_workers(999)

def test_resend_worker_link(app, bureau, sent_emails):
    worker = BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com')['worker']
    result = BureauService.resend_link('alpha@example.com', account_type='worker')

    assert result['email_sent'] is True
    assert worker.token in sent_emails[-1]['html_body']
    with pytest.raises(ValueError):
        BureauService.resend_link('alpha@example.com', account_type='president')

def test_resolve_token(app, bureau, sent_emails):
    worker = BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com')['worker']

    assert BureauService.resolve_token(bureau.token) == {'type': 'bureau', 'bureau': bureau}
    resolved = BureauService.resolve_token(worker.token)
    assert resolved['type'] == 'worker'
    assert resolved['worker'].id == worker.id
    assert resolved['bureau'].id == bureau.id
    with pytest.raises(NotFoundError):
        BureauService.resolve_token('0' * 32)

def test_api_worker_flow(client, bureau, sent_emails):
    response = client.post(f'/api/v1/bureaus/{bureau.id}/workers', json={
        'name': 'Alpha Diallo', 'email': 'alpha@example.com', 'access_level': 'read_only'
    })
    assert response.status_code == 201
    worker = response.get_json()['worker']
    assert worker['access_level'] == 'read_only'
    assert worker['interface_url'].startswith('https://partnerhub.test/syndicat/travailleur/')
    assert 'token' not in worker

    data = client.get(f'/api/v1/bureaus/workers?bureau_id={bureau.id}').get_json()
    assert [w['email'] for w in data['workers']] == ['alpha@example.com']

    data = client.get('/api/v1/bureaus').get_json()
    assert data['bureaus'][0]['worker_count'] == 1

    response = client.post('/api/v1/bureaus/resend-link', json={'email': 'alpha@example.com', 'type': 'worker'})
    assert response.status_code == 200

    response = client.post('/api/v1/bureaus/999/workers', json={'name': 'Nobody', 'email': 'x@example.com'})
    assert response.status_code == 404

def test_api_resolve_access_link(client, bureau, sent_emails):
    worker = BureauService.add_worker(bureau.id, 'Alpha Diallo', 'alpha@example.com')['worker']

    response = client.get(f'/api/v1/bureaus/access/{bureau.token}')
    assert response.status_code == 200
    assert response.get_json()['type'] == 'bureau'
    assert response.get_json()['bureau']['name'] == 'Bureau Kaloum'

    response = client.get(f'/api/v1/bureaus/access/{worker.token}')
    data = response.get_json()
    assert data['type'] == 'worker'
    assert data['worker']['name'] == 'Alpha Diallo'
    assert data['bureau']['id'] == bureau.id

    assert client.get('/api/v1/bureaus/access/unknown-token').status_code == 404
