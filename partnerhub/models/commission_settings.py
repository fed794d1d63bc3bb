from datetime import datetime
from partnerhub import db

class CommissionSettings(db.Model):
    __tablename__ = 'commission_settings'

    DEFAULTS = {
        'standard_rate': (0.05, 'Recommended commission rate for standard partners'),
        'vip_rate': (0.08, 'Recommended commission rate for VIP (premium) partners'),
        'top_rate': (0.12, 'Recommended commission rate for TOP partners'),
        'base_user_commission': (0.20, 'Commission rate applied to transactions of agent users'),
        'parent_share_ratio': (0.50, 'Share of an agent user commission paid to the parent agent')
    }

    id = db.Column(db.Integer, primary_key=True)
    key = db.Column(db.String(50), unique=True, nullable=False)
    value = db.Column(db.Float, nullable=False)
    description = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __init__(self, key, value, description=None):
        self.key = key
        self.value = value
        self.description = description

    @classmethod
    def get_value(cls, key, default=None):
        """Get a setting value by key, falling back to the built-in default"""
        setting = cls.query.filter_by(key=key).first()
        if setting:
            return setting.value
        if default is None and key in cls.DEFAULTS:
            return cls.DEFAULTS[key][0]
        return default

    @classmethod
    def set_value(cls, key, value, description=None, commit=True):
        """Set a setting value by key"""
        setting = cls.query.filter_by(key=key).first()
        if setting:
            setting.value = value
            setting.updated_at = datetime.utcnow()
        else:
            if description is None and key in cls.DEFAULTS:
                description = cls.DEFAULTS[key][1]
            setting = cls(key=key, value=value, description=description)
            db.session.add(setting)
        if commit:
            db.session.commit()
        return setting

    @classmethod
    def get_all_settings(cls):
        """Get all settings as a dictionary"""
        settings = cls.query.all()
        return {s.key: s.value for s in settings}

    @classmethod
    def initialize_default_settings(cls):
        """Initialize default settings if they don't exist"""
        for key, (value, description) in cls.DEFAULTS.items():
            if not cls.query.filter_by(key=key).first():
                cls.set_value(key, value, description, commit=False)
        db.session.commit()

        return cls.get_all_settings()

    def to_dict(self):
        return {
            'key': self.key,
            'value': self.value,
            'description': self.description,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None
        }
