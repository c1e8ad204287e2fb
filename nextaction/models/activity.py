"""
Activity model — every logged touchpoint with a lead (calls, DMs, engagements, notes).

engagement_day is only set on engagement rows written by the completion
handler; the unique constraint allows one completed engagement per lead per
business day.
"""
from sqlalchemy import Column, Integer, Text, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func

from nextaction.database import Base


class Activity(Base):
    __tablename__ = 'activities'
    __table_args__ = (
        UniqueConstraint('lead_id', 'engagement_day', name='uq_activity_lead_engagement_day'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Integer, ForeignKey('leads.id'), nullable=False, index=True)
    lead_name = Column(Text, default='')
    activity_type = Column(Text, nullable=False)      # call/text/email/dm/engagement/note
    outcome = Column(Text, nullable=True)             # no_response/conversation/booked/not_interested
    notes = Column(Text, nullable=True)
    performed_by_id = Column(Text, nullable=True)
    performed_by_name = Column(Text, nullable=True)
    department = Column(Text, nullable=True)
    shoot_date = Column(Date, nullable=True)
    activity_at = Column(DateTime(timezone=True), nullable=True)
    engagement_day = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def occurred_at(self):
        return self.activity_at or self.created_at
