"""Tests for nextaction.services.follow_ups — manual follow-up task CRUD."""
from datetime import date

import pytest

from nextaction.errors import NotFound, ValidationError
from nextaction.models.task import Task
from nextaction.services.follow_ups import create_follow_up, delete_follow_up, update_follow_up


@pytest.fixture
def lead(persist, make_lead):
    lead = make_lead(name='Ava Brooks')
    persist(lead)
    return lead


class TestCreateFollowUp:

    def test_creates_open_lead_task(self, db_session, lead):
        task = create_follow_up(db_session, lead.id, {
            'title': '  Send pricing  ',
            'description': 'Wedding package',
            'priority': 'high',
            'due_date': '2026-06-20',
            'due_time': '14:30',
        })
        assert task.id is not None
        assert task.title == 'Send pricing'
        assert task.status == 'open'
        assert task.priority == 'high'
        assert task.due_date == date(2026, 6, 20)
        assert task.due_time == '14:30'
        assert task.related_to_type == 'lead'
        assert task.related_to_id == lead.id
        assert task.related_to_name == 'Ava Brooks'
        assert task.owner_id == 'user-1'

    def test_reassigned_owner_gets_the_task(self, db_session, persist, make_lead):
        lead = make_lead(reassigned_owner_id='user-2')
        persist(lead)
        assert create_follow_up(db_session, lead.id, {'title': 'Call'}).owner_id == 'user-2'

    def test_explicit_owner(self, db_session, lead):
        assert create_follow_up(db_session, lead.id, {'title': 'Call'}, owner_id='user-5').owner_id == 'user-5'

    def test_optional_fields_default_to_none(self, db_session, lead):
        task = create_follow_up(db_session, lead.id, {'title': 'Call', 'priority': '', 'due_date': ''})
        assert task.priority is None
        assert task.due_date is None

    @pytest.mark.parametrize('data', [
        {},
        {'title': '   '},
        {'title': 'Call', 'priority': 'urgent'},
        {'title': 'Call', 'due_date': '06/20/2026'},
        {'title': 'Call', 'due_time': '25:00'},
        {'title': 'Call', 'due_time': '9am'},
    ])
    def test_invalid_input(self, db_session, lead, data):
        with pytest.raises(ValidationError):
            create_follow_up(db_session, lead.id, data)
        assert db_session.query(Task).count() == 0

    def test_missing_lead(self, db_session):
        with pytest.raises(NotFound):
            create_follow_up(db_session, 404, {'title': 'Call'})


class TestUpdateFollowUp:

    @pytest.fixture
    def task(self, db_session, lead):
        return create_follow_up(db_session, lead.id, {'title': 'Call', 'priority': 'medium'})

    def test_partial_update(self, db_session, task):
        updated = update_follow_up(db_session, task.id, {'priority': 'low', 'due_date': '2026-07-01'})
        assert updated.title == 'Call'
        assert updated.priority == 'low'
        assert updated.due_date == date(2026, 7, 1)

    def test_clearing_fields(self, db_session, task):
        updated = update_follow_up(db_session, task.id, {'priority': None})
        assert updated.priority is None

    def test_status_not_editable_here(self, db_session, task):
        updated = update_follow_up(db_session, task.id, {'status': 'done', 'title': 'Call again'})
        assert updated.status == 'open'
        assert updated.title == 'Call again'

    def test_blank_title_rejected(self, db_session, task):
        with pytest.raises(ValidationError):
            update_follow_up(db_session, task.id, {'title': ''})

    def test_missing_task(self, db_session):
        with pytest.raises(NotFound):
            update_follow_up(db_session, 404, {'title': 'Call'})


class TestDeleteFollowUp:

    def test_deletes(self, db_session, lead):
        task = create_follow_up(db_session, lead.id, {'title': 'Call'})
        task_id = task.id
        delete_follow_up(db_session, task_id)
        assert db_session.get(Task, task_id) is None

    def test_missing_task(self, db_session):
        with pytest.raises(NotFound):
            delete_follow_up(db_session, 404)
