#!/usr/bin/env python3
"""
Seed demo data for trying the next best actions API locally.

Creates one salesperson's book of leads covering every rule:
  1. New social lead, never contacted        → Daily Engagement (New Lead)
  2. Social lead DM'd 31 days ago            → DM Follow-up (Day 30)
  3. Cold-outreach lead created today        → Initial Cold Call
  4. Cold-outreach lead last called 5d ago   → Cold Call Follow-up (Day 4)
  5. First booking 8 days ago                → Post-Booking Check-in (Day 7)
  6. Two bookings, latest 61 days ago        → Repeat Booking Outreach (Day 60)
  7. Lost lead with an open manual task      → manual task only

Usage:
    python scripts/seed_demo_data.py          # seed all scenarios
    python scripts/seed_demo_data.py --clear  # wipe seeded data first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import argparse
from datetime import datetime, timezone, timedelta

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nextaction.database import get_session, init_db
from nextaction.models.lead import Lead
from nextaction.models.activity import Activity
from nextaction.models.booking import Booking
from nextaction.models.task import Task
from nextaction.models.app_setting import AppSetting

DEMO_OWNER = 'demo-user'
SEED_TAG = '[seed]'


def ago(days=0, hours=0):
    return datetime.now(timezone.utc) - timedelta(days=days, hours=hours)


def clear(session):
    seeded = session.query(Lead).filter(Lead.owner_id == DEMO_OWNER).all()
    ids = [lead.id for lead in seeded]
    if ids:
        session.query(Activity).filter(Activity.lead_id.in_(ids)).delete(synchronize_session=False)
        session.query(Booking).filter(Booking.lead_id.in_(ids)).delete(synchronize_session=False)
        session.query(Task).filter(Task.related_to_id.in_(ids)).delete(synchronize_session=False)
        session.query(Lead).filter(Lead.id.in_(ids)).delete(synchronize_session=False)
    session.query(AppSetting).filter(AppSetting.value.like(f'{SEED_TAG}%')).delete(synchronize_session=False)
    session.commit()
    print(f"Cleared {len(ids)} seeded leads")


def add_lead(session, name, **kwargs):
    kwargs.setdefault('owner_id', DEMO_OWNER)
    kwargs.setdefault('created_at', ago(40))
    lead = Lead(name=name, **kwargs)
    session.add(lead)
    session.flush()
    return lead


def seed(session):
    new_social = add_lead(session, 'Ava Brooks', status='new', lead_source='social_media',
                          instagram_link='https://instagram.com/ava.brooks', created_at=ago(1))

    dm_lead = add_lead(session, 'Marcus Hill', status='contacted', lead_source='social_media',
                       instagram_link='https://instagram.com/marcushill')
    session.add(Activity(lead_id=dm_lead.id, lead_name=dm_lead.name, activity_type='dm',
                         outcome='no_response', created_at=ago(31)))

    add_lead(session, 'Priya Raman', status='new', lead_source='cold_outreach', phone='555-0101',
             created_at=ago(hours=2))

    called = add_lead(session, 'Owen Walsh', status='contacted', lead_source='cold_outreach', phone='555-0102')
    session.add(Activity(lead_id=called.id, lead_name=called.name, activity_type='call',
                         outcome='no_response', created_at=ago(5)))

    first_booker = add_lead(session, 'Lena Ortiz', status='won', lead_source='referral')
    session.add(Booking(lead_id=first_booker.id, lead_name=first_booker.name, booked_at=ago(8), created_at=ago(8)))

    repeat = add_lead(session, 'Sam Patel', status='won', lead_source='website', created_at=ago(200))
    session.add(Booking(lead_id=repeat.id, lead_name=repeat.name, booked_at=ago(150), created_at=ago(150)))
    session.add(Booking(lead_id=repeat.id, lead_name=repeat.name, booked_at=ago(61), created_at=ago(61)))

    lost = add_lead(session, 'Jo Kim', status='lost', lead_source='event')
    session.add(Task(title='Send final offer', status='open', priority='medium',
                     due_date=ago(0).date(), related_to_type='lead', related_to_id=lost.id,
                     related_to_name=lost.name, owner_id=DEMO_OWNER))

    session.add(Task(title='Daily Engagement', status='open', related_to_type='lead',
                     related_to_id=new_social.id, related_to_name=new_social.name, owner_id=DEMO_OWNER))

    session.add(AppSetting(setting_type='next_best_actions', label='DM Follow-up (Day 30)',
                           value=f'{SEED_TAG} dm_follow_up_day_30', is_active=True, sort_order=0,
                           config={'completion_criteria': 'any_outreach'}))

    session.commit()
    print(f"Seeded demo leads for owner '{DEMO_OWNER}'")
    print(f"Try: GET /api/next-best-actions?user_id={DEMO_OWNER}")


def main():
    parser = argparse.ArgumentParser(description='Seed demo next-best-action data')
    parser.add_argument('--clear', action='store_true', help='Remove previously seeded data first')
    args = parser.parse_args()

    init_db()
    session = get_session()
    try:
        if args.clear:
            clear(session)
        seed(session)
    finally:
        session.close()


if __name__ == '__main__':
    main()
