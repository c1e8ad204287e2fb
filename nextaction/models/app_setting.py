"""
AppSetting model — admin-editable settings rows.

Next-best-action rules use setting_type='next_best_actions' with the rule
label in `label` and {'completion_criteria': ...} in `config`.
"""
from sqlalchemy import Column, Integer, Text, Boolean, DateTime, JSON
from sqlalchemy.sql import func

from nextaction.database import Base


class AppSetting(Base):
    __tablename__ = 'app_settings'

    id = Column(Integer, primary_key=True, autoincrement=True)
    setting_type = Column(Text, nullable=False, index=True)
    label = Column(Text, nullable=False)
    value = Column(Text, default='')
    is_active = Column(Boolean, default=True)
    sort_order = Column(Integer, default=0)
    config = Column(JSON, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self):
        config = self.config or {}
        return {
            'id': self.id,
            'setting_type': self.setting_type,
            'label': self.label,
            'value': self.value,
            'is_active': bool(self.is_active),
            'sort_order': self.sort_order,
            'completion_criteria': config.get('completion_criteria'),
            'description': config.get('description'),
        }
