"""Tests for nextaction.routes.dashboard — health check and the per-user list."""
import pytest
from unittest.mock import patch

NOW_PARAM = '2026-06-15T16:00:00Z'


# ---------------------------------------------------------------------------
# /health
# ---------------------------------------------------------------------------

class TestHealthCheck:
    """GET /health returns a simple health status."""

    def test_returns_200_with_healthy_status(self, client):
        resp = client.get('/health')
        assert resp.status_code == 200
        assert resp.json == {"status": "healthy"}


# ---------------------------------------------------------------------------
# /api/next-best-actions
# ---------------------------------------------------------------------------

class TestNextBestActions:
    """GET /api/next-best-actions?user_id= returns the user's ranked top actions."""

    def test_requires_user_id(self, client):
        resp = client.get('/api/next-best-actions')
        assert resp.status_code == 400
        assert resp.json['type'] == 'ValidationError'

    def test_empty_for_unknown_user(self, client):
        resp = client.get(f'/api/next-best-actions?user_id=nobody&now={NOW_PARAM}')
        assert resp.status_code == 200
        assert resp.json == {'today': '2026-06-15', 'count': 0, 'actions': [], 'user_id': 'nobody'}

    def test_lists_ranked_actions(self, client, persist, make_lead, make_activity, make_task):
        social = make_lead(status='new', instagram_link='https://instagram.com/ava')
        dm = make_lead(status='contacted', lead_source='social_media', name='Marcus')
        persist(social, dm)
        persist(make_activity(dm, 'dm', days_ago=31), make_task(social, title='Send pricing'))

        resp = client.get(f'/api/next-best-actions?user_id=user-1&now={NOW_PARAM}')
        assert resp.status_code == 200
        data = resp.json
        assert data['count'] == 3
        assert [a['id'] for a in data['actions']] == [
            f'dm-{dm.id}-day30',
            f'engage-{social.id}-new',
            'task-1',
        ]
        first = data['actions'][0]
        assert first['label'] == 'DM Follow-up (Day 30)'
        assert first['lead_name'] == 'Marcus'
        assert first['urgency'] == 'high'
        assert first['completable'] is False
        assert first['due_date'].startswith('2026-06-14T16:00:00')
        assert data['actions'][1]['social_links'] == {'instagram': 'https://instagram.com/ava', 'facebook': None}
        assert data['actions'][2]['completable'] is True

    def test_limited_to_ten(self, client, persist, make_lead):
        persist(*[make_lead(lead_source='cold_outreach') for _ in range(12)])
        resp = client.get(f'/api/next-best-actions?user_id=user-1&now={NOW_PARAM}')
        assert resp.json['count'] == 10

    def test_app_setting_changes_dm_criterion(self, client, persist, make_lead, make_activity):
        from nextaction.models.app_setting import AppSetting
        from nextaction.services import rule_config
        rule_config._rules_config = None

        lead = make_lead(status='contacted', lead_source='social_media')
        persist(lead)
        persist(
            make_activity(lead, 'dm', days_ago=31),
            make_activity(lead, 'call', days_ago=10),
        )
        url = f'/api/next-best-actions?user_id=user-1&now={NOW_PARAM}'
        assert client.get(url).json['count'] == 0

        persist(AppSetting(setting_type='next_best_actions', label='DM Follow-up (Day 30)', value='dm30',
                           is_active=True, sort_order=0, config={'completion_criteria': 'engagement'}))
        assert [a['id'] for a in client.get(url).json['actions']] == [f'dm-{lead.id}-day30']

    def test_invalid_now(self, client):
        resp = client.get('/api/next-best-actions?user_id=user-1&now=yesterday')
        assert resp.status_code == 400


class TestPasswordGate:
    """With DASHBOARD_PASSWORD set, API calls need a logged-in session."""

    @pytest.fixture
    def locked_client(self, monkeypatch):
        monkeypatch.setattr('nextaction.config.DASHBOARD_PASSWORD', 'hunter2')
        from nextaction import create_app
        app = create_app()
        app.config['TESTING'] = True
        with app.test_client() as c:
            yield c

    def test_api_requires_login(self, locked_client):
        resp = locked_client.get('/api/next-best-actions?user_id=user-1')
        assert resp.status_code == 401
        assert resp.json['type'] == 'Unauthorized'

    def test_health_is_open(self, locked_client):
        assert locked_client.get('/health').status_code == 200

    def test_login_unlocks_api(self, locked_client):
        resp = locked_client.post('/login', data={'password': 'hunter2'})
        assert resp.status_code == 302
        assert locked_client.get('/api/next-best-actions?user_id=user-1').status_code == 200

    def test_wrong_password(self, locked_client):
        resp = locked_client.post('/login', data={'password': 'nope'})
        assert b'Wrong password' in resp.data


class TestErrorHandling:

    def test_unexpected_error_is_json_500(self, client):
        with patch('nextaction.routes.dashboard.compute_actions', side_effect=RuntimeError('boom')):
            resp = client.get('/api/next-best-actions?user_id=user-1')
        assert resp.status_code == 500
        assert resp.json == {'error': 'boom', 'type': 'InternalError'}

    def test_unknown_route_still_404(self, client):
        assert client.get('/api/nope').status_code == 404
