"""
Lead model — one row per prospect a salesperson is working.
"""
from sqlalchemy import Column, Integer, Text, DateTime
from sqlalchemy.sql import func

from nextaction.database import Base


class Lead(Base):
    __tablename__ = 'leads'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, default='')
    phone = Column(Text, default='')
    email = Column(Text, default='')
    status = Column(Text, nullable=False, default='new')             # new/contacted/engaged/nurture/won/lost
    lead_source = Column(Text, nullable=False, default='other')      # social_media/cold_outreach/referral/...
    instagram_link = Column(Text, nullable=True)
    facebook_link = Column(Text, nullable=True)
    owner_id = Column(Text, nullable=True, index=True)
    reassigned_owner_id = Column(Text, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def display_name(self):
        return self.name or self.phone or ''

    @property
    def social_links(self):
        return {'instagram': self.instagram_link, 'facebook': self.facebook_link}

    def has_social_link(self):
        return bool(self.instagram_link or self.facebook_link)
