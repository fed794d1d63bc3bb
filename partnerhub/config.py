import os
from dotenv import load_dotenv

basedir = os.path.abspath(os.path.dirname(__file__))
load_dotenv()

class Config:
    # Security
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key'

    # Database
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, '..', 'partnerhub.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Transactional email (SendGrid)
    SENDGRID_API_KEY = os.environ.get('SENDGRID_API_KEY')
    MAIL_DEFAULT_SENDER = os.environ.get('MAIL_DEFAULT_SENDER') or 'onboarding@partnerhub.local'
    COMMISSION_NOTIFICATIONS_ENABLED = os.environ.get('COMMISSION_NOTIFICATIONS_ENABLED', 'True').lower() == 'true'

    # Permanent links are built from this base
    BASE_URL = (os.environ.get('BASE_URL') or 'http://localhost:8000').rstrip('/')

    # Commissions
    DEFAULT_CURRENCY = os.environ.get('DEFAULT_CURRENCY') or 'GNF'

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR') or 'logs'


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SENDGRID_API_KEY = 'test-key'
    MAIL_DEFAULT_SENDER = 'noreply@partnerhub.test'
    BASE_URL = 'https://partnerhub.test'
