"""Tests for nextaction.routes.actions — POST /api/actions/<id>/complete."""
NOW_PARAM = '2026-06-15T16:00:00Z'


class TestCompleteAction:

    def test_complete_manual_task(self, client, persist, make_lead, make_task):
        lead = make_lead()
        task = make_task(lead)
        persist(lead, task)

        resp = client.post(f'/api/actions/task-{task.id}/complete', json={'now': NOW_PARAM})
        assert resp.status_code == 200
        assert resp.json == {
            'status': 'completed',
            'action_id': f'task-{task.id}',
            'task_id': task.id,
            'task_status': 'done',
        }

    def test_completing_twice_conflicts(self, client, persist, make_lead, make_task):
        lead = make_lead()
        task = make_task(lead)
        persist(lead, task)
        client.post(f'/api/actions/task-{task.id}/complete')
        resp = client.post(f'/api/actions/task-{task.id}/complete')
        assert resp.status_code == 409
        assert resp.json['type'] == 'StateConflict'

    def test_complete_engagement(self, client, persist, make_lead):
        lead = make_lead(status='new', instagram_link='https://instagram.com/x')
        persist(lead)

        resp = client.post(f'/api/actions/engage-{lead.id}-new/complete',
                           json={'now': NOW_PARAM, 'lead_id': lead.id, 'performed_by_id': 'user-1'})
        assert resp.status_code == 200
        assert resp.json['lead_id'] == lead.id
        assert resp.json['engagement_day'] == '2026-06-15'

        listed = client.get(f'/api/next-best-actions?user_id=user-1&now={NOW_PARAM}').json
        assert listed['actions'] == []

        again = client.post(f'/api/actions/engage-{lead.id}-new/complete', json={'now': NOW_PARAM})
        assert again.status_code == 409

    def test_rule_action_not_completable(self, client):
        resp = client.post('/api/actions/dm-1-day30/complete')
        assert resp.status_code == 400
        assert resp.json['type'] == 'ValidationError'

    def test_missing_task(self, client):
        resp = client.post('/api/actions/task-404/complete')
        assert resp.status_code == 404

    def test_missing_lead(self, client):
        resp = client.post('/api/actions/engage-404-new/complete')
        assert resp.status_code == 404

    def test_numeric_now_rejected(self, client, persist, make_lead, make_task):
        lead = make_lead()
        task = make_task(lead)
        persist(lead, task)
        resp = client.post(f'/api/actions/task-{task.id}/complete', json={'now': 123})
        assert resp.status_code == 400
        assert resp.json['type'] == 'ValidationError'
        assert 'ISO 8601' in resp.json['error']

    def test_non_object_body_uses_real_clock(self, client, persist, make_lead, make_task):
        lead = make_lead()
        task = make_task(lead)
        persist(lead, task)
        resp = client.post(f'/api/actions/task-{task.id}/complete', json=['now'])
        assert resp.status_code == 200
