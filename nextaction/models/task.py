"""
Task model — manual follow-up reminders attached to a lead.
"""
from sqlalchemy import Column, Integer, Text, Date, DateTime
from sqlalchemy.sql import func

from nextaction.database import Base


class Task(Base):
    __tablename__ = 'tasks'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default='open')   # open/done
    priority = Column(Text, nullable=True)                  # high/medium/low
    due_date = Column(Date, nullable=True)
    due_time = Column(Text, nullable=True)                  # HH:MM
    related_to_type = Column(Text, nullable=False, default='lead')
    related_to_id = Column(Integer, nullable=True, index=True)
    related_to_name = Column(Text, nullable=True)
    owner_id = Column(Text, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'status': self.status,
            'priority': self.priority,
            'due_date': self.due_date.isoformat() if self.due_date else None,
            'due_time': self.due_time,
            'related_to_type': self.related_to_type,
            'related_to_id': self.related_to_id,
            'related_to_name': self.related_to_name,
            'owner_id': self.owner_id,
        }
