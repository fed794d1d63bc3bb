import pytest

from partnerhub.errors import InvalidRateError, NotFoundError
from partnerhub.models.agent import AgentCommission
from partnerhub.services.agent import AgentService
from partnerhub.services.split import split

@pytest.mark.parametrize('amount, rate, share, expected', [
    (1000, 0.20, 0.50, (200, 100, 100)),
    (1000000, 0.05, 0.5, (50000, 25000, 25000)),
    (0, 0.2, 0.5, (0, 0, 0)),
    (1000, 0.2, 0, (200, 0, 200)),
    (1000, 0.2, 1, (200, 200, 0)),
])
def test_split_values(amount, rate, share, expected):
    result = split(amount, rate, share)
    assert result == expected
    assert result.parent_portion + result.sub_agent_portion == result.total_commission

@pytest.mark.parametrize('amount, rate, share', [
    (333.33, 0.07, 0.3),
    (12345.67, 0.15, 0.35),
    (99.99, 0.033, 0.71),
])
def test_split_formulas(amount, rate, share):
    result = split(amount, rate, share)
    assert result.total_commission == amount * rate
    assert result.parent_portion == result.total_commission * share
    assert result.sub_agent_portion == result.total_commission - result.parent_portion

@pytest.mark.parametrize('rate, share', [(-0.1, 0.5), (1.1, 0.5), (0.2, -0.5), (0.2, 1.01)])
def test_split_rejects_invalid_rates(rate, share):
    with pytest.raises(InvalidRateError):
        split(1000, rate, share)

def test_split_rejects_negative_amount():
    with pytest.raises(ValueError):
        split(-1, 0.2, 0.5)

@pytest.fixture
def agents(app):
    agent = AgentService.create_agent('Mamadou', 'mamadou@example.com', can_create_sub_agent=True)
    sub_agent = AgentService.create_sub_agent(agent.id, 'Fatou', 'fatou@example.com')
    return agent, sub_agent

def test_create_sub_agent_requires_permission(app):
    agent = AgentService.create_agent('Ibrahima', 'ibrahima@example.com')
    with pytest.raises(ValueError, match='not authorized'):
        AgentService.create_sub_agent(agent.id, 'Awa', 'awa@example.com')

def test_create_sub_agent_unknown_parent(app):
    with pytest.raises(ValueError):
        AgentService.create_sub_agent(404, 'Awa', 'awa@example.com')

def test_duplicate_agent_email(app, agents):
    with pytest.raises(ValueError):
        AgentService.create_agent('Other', 'mamadou@example.com')

def test_process_transaction_with_default_settings(app, agents):
    agent, sub_agent = agents
    record = AgentService.process_transaction(sub_agent.id, 1000)

    assert record.agent_id == agent.id
    assert record.sub_agent_id == sub_agent.id
    assert record.base_rate == 0.20
    assert record.parent_share == 0.50
    assert record.total_commission == 200
    assert record.parent_portion == 100
    assert record.sub_agent_portion == 100
    assert AgentCommission.query.count() == 1
    assert AgentService.get_agent_commissions(agent.id) == [record]

def test_process_transaction_with_updated_settings(app, agents):
    _, sub_agent = agents
    AgentService.update_split_settings(0.1, 0.25)

    record = AgentService.process_transaction(sub_agent.id, 2000)
    assert record.total_commission == 200
    assert record.parent_portion == 50
    assert record.sub_agent_portion == 150

def test_invalid_split_settings_are_not_saved(app):
    with pytest.raises(InvalidRateError):
        AgentService.update_split_settings(0.1, 1.5)
    assert AgentService.get_split_settings() == {'base_commission': 0.20, 'parent_share': 0.50}

def test_process_transaction_unknown_sub_agent(app):
    with pytest.raises(NotFoundError):
        AgentService.process_transaction(77, 1000)

def test_api_agent_flow(client):
    response = client.post('/api/v1/agents', json={
        'name': 'Mamadou', 'email': 'mamadou@example.com', 'can_create_sub_agent': True
    })
    assert response.status_code == 201
    agent_id = response.get_json()['agent']['id']

    response = client.post(f'/api/v1/agents/{agent_id}/sub-agents', json={
        'name': 'Fatou', 'email': 'fatou@example.com'
    })
    assert response.status_code == 201
    sub_agent_id = response.get_json()['sub_agent']['id']

    response = client.post('/api/v1/agents/transactions', json={'sub_agent_id': sub_agent_id, 'amount': 1000})
    assert response.status_code == 201
    commission = response.get_json()['commission']
    assert commission['parent_portion'] == 100
    assert commission['sub_agent_portion'] == 100

    response = client.get(f'/api/v1/agents/{agent_id}/commissions')
    assert len(response.get_json()['commissions']) == 1

def test_api_split_preview(client):
    response = client.post('/api/v1/agents/split', json={'amount': 1000000, 'base_commission': 0.05})
    assert response.status_code == 200
    assert response.get_json() == {
        'total_commission': 50000, 'parent_portion': 25000, 'sub_agent_portion': 25000
    }

def test_api_split_settings(client):
    response = client.put('/api/v1/agents/settings', json={'base_commission': 0.3, 'parent_share': 0.4})
    assert response.status_code == 200
    assert client.get('/api/v1/agents/settings').get_json() == {'base_commission': 0.3, 'parent_share': 0.4}

    response = client.put('/api/v1/agents/settings', json={'base_commission': 'abc', 'parent_share': 0.4})
    assert response.status_code == 400

@pytest.mark.parametrize('amount', [float('inf'), float('nan'), '1000', None, True])
def test_split_rejects_non_finite_or_non_numeric_amount(amount):
    with pytest.raises(ValueError):
        split(amount, 0.2, 0.5)

@pytest.mark.parametrize('rate', [float('inf'), float('nan')])
def test_split_rejects_non_finite_rates(rate):
    with pytest.raises(InvalidRateError):
        split(1000, rate, 0.5)
    with pytest.raises(InvalidRateError):
        split(1000, 0.2, rate)

@pytest.mark.parametrize('amount', ['inf', '-inf', 'nan', '1e400'])
def test_api_split_preview_rejects_non_finite_amount(client, amount):
    response = client.post('/api/v1/agents/split', json={'amount': amount, 'base_commission': 0.2, 'parent_share': 0.5})
    assert response.status_code == 400
    assert 'amount' in response.get_json()['error']

def test_api_transaction_rejects_non_finite_amount(client, agents):
    _, sub_agent = agents
    response = client.post('/api/v1/agents/transactions', json={'sub_agent_id': sub_agent.id, 'amount': 'inf'})
    assert response.status_code == 400
    assert AgentCommission.query.count() == 0

@pytest.mark.parametrize('sub_agent_id', [[1], 'abc', 1.5])
def test_api_transaction_rejects_bad_sub_agent_id(client, agents, sub_agent_id):
    response = client.post('/api/v1/agents/transactions', json={'sub_agent_id': sub_agent_id, 'amount': 100})
    assert response.status_code == 400

def test_api_agent_fields_must_be_text(client):
    response = client.post('/api/v1/agents', json={'name': ['Mamadou'], 'email': 'mamadou@example.com'})
    assert response.status_code == 400
    assert 'name' in response.get_json()['error']
