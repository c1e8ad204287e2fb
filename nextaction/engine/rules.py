"""
Cadence rules — the five independent policies behind next best actions.

Engagement: keep liking/commenting on social leads at a pace set by how far
            the relationship has got (new → contacted → conversation → booked).
DM:         follow up on day 3/14/30 after the first DM unless already handled.
Cold:       call cold-outreach leads on day 2/4 after the last touch.
Check-in:   first-time bookers get a call on day 3/7 after booking.
Repeat:     anyone who has booked gets repeat outreach on day 30/60.

Each rule returns at most one action per lead. Thresholds are fixed policy;
only the DM completion criteria are configurable (see services.rule_config).
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from nextaction.config import DEFAULT_COMPLETION_CRITERION
from nextaction.engine.base import CadenceRule, EvaluationContext, RecommendedAction
from nextaction.engine.clock import as_aware, days_between
from nextaction.engine.lookup import LeadHistory, is_contact

logger = logging.getLogger('engine.rules')


# ── Engagement cadence ───────────────────────────────────────────────────────

ENGAGEMENT_STATUSES = ('new', 'engaged')
POST_CONTACT_WINDOW_DAYS = 5

# sub_key → (label, interval_days, urgency)
ENGAGEMENT_BRANCHES = {
    'booked':    ('Engage (Booked Client)', 5, 'low'),
    'convo':     ('Every Other Day Engagement', 2, 'medium'),
    'contacted': ('Daily Engagement (Post-Contact)', 1, 'medium'),
    'new':       ('Daily Engagement (New Lead)', 1, 'high'),
}


class EngagementCadence(CadenceRule):
    name = 'engage'
    action_type = 'engagement'
    description = 'Social engagement cadence for new/engaged leads with social links'

    def select_branch(self, history: LeadHistory, ctx: EvaluationContext) -> Optional[str]:
        """Pick exactly one cadence branch; None when post-contact window has lapsed."""
        if history.has_booked:
            return 'booked'
        if history.last_conversation_date is not None:
            return 'convo'
        if history.has_contacted:
            if days_between(ctx.now, history.first_contact_date) > POST_CONTACT_WINDOW_DAYS:
                return None
            return 'contacted'
        return 'new'

    def evaluate(self, lead, history: LeadHistory, ctx: EvaluationContext) -> Optional[RecommendedAction]:
        if lead.status not in ENGAGEMENT_STATUSES or not lead.has_social_link():
            return None

        branch = self.select_branch(history, ctx)
        if branch is None:
            return None
        label, interval, urgency = ENGAGEMENT_BRANCHES[branch]

        if history.engaged_today:
            return None
        last_engagement = history.last_engagement_date
        # Business calendar days, so a noon-stamped engagement does not hide tomorrow morning
        if last_engagement is not None and (ctx.today - ctx.clock.local_date(last_engagement)).days < interval:
            return None

        return self.make_action(lead, branch, label, urgency, ctx.today_start)


# ── DM follow-up ─────────────────────────────────────────────────────────────

# Largest threshold first; the first unsuppressed one wins
DM_THRESHOLDS = [
    (30, 'high'),
    (14, 'medium'),
    (3, 'low'),
]


def dm_label(days: int) -> str:
    return f'DM Follow-up (Day {days})'


def criterion_satisfied(criterion: str, history: LeadHistory, since: datetime) -> bool:
    """True when activity after `since` already counts as handling the follow-up."""
    later = history.activities_after(since)
    if criterion == 'any_outreach':
        return any(is_contact(a) for a in later)
    if criterion == 'engagement':
        return any(a.activity_type == 'engagement' for a in later)
    if criterion == 'conversation':
        return any(a.outcome == 'conversation' for a in later)
    if criterion == 'booking':
        return bool(history.bookings_created_after(since))
    # 'manual' and anything unrecognised: only another DM clears it
    return any(a.activity_type == 'dm' for a in later)


class DMFollowUp(CadenceRule):
    name = 'dm'
    action_type = 'dm'
    description = 'Day 3/14/30 follow-ups after the first DM to a social-media lead'

    def evaluate(self, lead, history: LeadHistory, ctx: EvaluationContext) -> Optional[RecommendedAction]:
        if lead.lead_source != 'social_media' or lead.status == 'won':
            return None
        first_dm = history.first_dm_date
        if first_dm is None:
            return None

        elapsed = days_between(ctx.now, first_dm)
        for days, urgency in DM_THRESHOLDS:
            if elapsed < days:
                continue
            label = dm_label(days)
            criterion = ctx.completion_criteria.get(label, DEFAULT_COMPLETION_CRITERION)
            if criterion_satisfied(criterion, history, first_dm):
                logger.debug("Lead %s: %s suppressed by %s", lead.id, label, criterion)
                continue
            return self.make_action(lead, f'day{days}', label, urgency, first_dm + timedelta(days=days))
        return None


# ── Cold outreach ────────────────────────────────────────────────────────────

class ColdOutreachCadence(CadenceRule):
    name = 'cold'
    action_type = 'call'
    description = 'Day 2/4 call cadence for cold-outreach leads'

    def evaluate(self, lead, history: LeadHistory, ctx: EvaluationContext) -> Optional[RecommendedAction]:
        if lead.lead_source != 'cold_outreach' or lead.status == 'won':
            return None

        created = as_aware(lead.created_at)
        last_activity = history.last_activity_date
        reference = last_activity or created
        since_last = days_between(ctx.now, reference)

        if since_last >= 4:
            return self.make_action(lead, 'day4', 'Cold Call Follow-up (Day 4)', 'high',
                                    reference + timedelta(days=4))
        if since_last >= 2:
            return self.make_action(lead, 'day2', 'Cold Call Follow-up (Day 2)', 'medium',
                                    reference + timedelta(days=2))
        if last_activity is None and days_between(ctx.now, created) >= 0:
            return self.make_action(lead, 'initial', 'Initial Cold Call', 'high', created)
        return None


# ── Bookings ─────────────────────────────────────────────────────────────────

def touched_since(history: LeadHistory, moment: datetime, mode: str) -> bool:
    """Has the lead been reached since `moment`?

    mode='outreach'     → any call/text/email/dm
    mode='conversation' → any activity with a conversation outcome
    """
    later = history.activities_after(moment)
    if mode == 'conversation':
        return any(a.outcome == 'conversation' for a in later)
    return any(is_contact(a) for a in later)


class FirstBookingCheckIn(CadenceRule):
    name = 'checkin'
    action_type = 'call'
    description = 'Day 3/7 check-in after a first booking'

    def evaluate(self, lead, history: LeadHistory, ctx: EvaluationContext) -> Optional[RecommendedAction]:
        if len(history.bookings) != 1:
            return None
        booked = history.last_booking_date
        if touched_since(history, booked, ctx.booking_suppression):
            return None

        since = days_between(ctx.now, booked)
        if since >= 7:
            return self.make_action(lead, 'day7', 'Post-Booking Check-in (Day 7)', 'medium',
                                    booked + timedelta(days=7))
        if since >= 3:
            return self.make_action(lead, 'day3', 'Post-Booking Check-in (Day 3)', 'low',
                                    booked + timedelta(days=3))
        return None


class RepeatBookingOutreach(CadenceRule):
    name = 'repeat'
    action_type = 'call'
    description = 'Day 30/60 repeat-booking outreach after the latest booking'

    def evaluate(self, lead, history: LeadHistory, ctx: EvaluationContext) -> Optional[RecommendedAction]:
        if not history.has_booked:
            return None
        booked = history.last_booking_date
        if touched_since(history, booked, ctx.booking_suppression):
            return None

        since = days_between(ctx.now, booked)
        if since >= 60:
            return self.make_action(lead, 'day60', 'Repeat Booking Outreach (Day 60)', 'high',
                                    booked + timedelta(days=60))
        if since >= 30:
            return self.make_action(lead, 'day30', 'Repeat Booking Outreach (Day 30)', 'medium',
                                    booked + timedelta(days=30))
        return None


# ── Registry ─────────────────────────────────────────────────────────────────

RULES: List[CadenceRule] = [
    EngagementCadence(),
    DMFollowUp(),
    ColdOutreachCadence(),
    FirstBookingCheckIn(),
    RepeatBookingOutreach(),
]


def evaluate_lead(lead, history: LeadHistory, ctx: EvaluationContext,
                  rules: Optional[List[CadenceRule]] = None) -> List[RecommendedAction]:
    """Run every rule against one lead. Lost leads never get rule actions."""
    if lead.status == 'lost':
        return []
    actions = []
    for rule in rules if rules is not None else RULES:
        action = rule.evaluate(lead, history, ctx)
        if action is not None:
            actions.append(action)
    return actions
