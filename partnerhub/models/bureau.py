from datetime import datetime
from .. import db

# Access granted to a worker on its bureau interface
WORKER_ACCESS_LEVELS = ('full', 'limited', 'read_only')

class Bureau(db.Model):
    """Syndicate office reached through a permanent tokenized link"""
    __tablename__ = 'bureau'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    president_email = db.Column(db.String(120), nullable=False, unique=True)
    city = db.Column(db.String(120))
    token = db.Column(db.String(32), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    workers = db.relationship('Worker', backref='bureau', lazy='dynamic')

    def __init__(self, name, president_email, token, city=None):
        self.name = name
        self.president_email = president_email
        self.token = token
        self.city = city

    def interface_url(self, base_url):
        return f"{base_url.rstrip('/')}/syndicat/bureau/{self.token}"

    def to_dict(self, base_url=None):
        data = {
            'id': self.id,
            'name': self.name,
            'president_email': self.president_email,
            'city': self.city,
            'worker_count': self.workers.count(),
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
        if base_url:
            data['interface_url'] = self.interface_url(base_url)
        return data


class Worker(db.Model):
    """Member of a bureau with its own permanent link"""
    __tablename__ = 'worker'
    __table_args__ = (db.UniqueConstraint('bureau_id', 'email', name='uq_worker_bureau_email'),)

    id = db.Column(db.Integer, primary_key=True)
    bureau_id = db.Column(db.Integer, db.ForeignKey('bureau.id'), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(120), nullable=False, index=True)
    phone = db.Column(db.String(20))
    access_level = db.Column(db.String(20), nullable=False, default='limited')  # full, limited, read_only
    token = db.Column(db.String(32), nullable=False, unique=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __init__(self, bureau_id, name, email, token, phone=None, access_level='limited'):
        self.bureau_id = bureau_id
        self.name = name
        self.email = email
        self.token = token
        self.phone = phone
        self.access_level = access_level

    def interface_url(self, base_url):
        return f"{base_url.rstrip('/')}/syndicat/travailleur/{self.token}"

    def to_dict(self, base_url=None):
        data = {
            'id': self.id,
            'bureau_id': self.bureau_id,
            'bureau_name': self.bureau.name if self.bureau else None,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'access_level': self.access_level,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
        if base_url:
            data['interface_url'] = self.interface_url(base_url)
        return data
