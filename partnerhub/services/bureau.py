import secrets
from flask import current_app
from .. import db
from ..errors import EmailDeliveryError, NotFoundError
from ..models.bureau import Bureau, Worker, WORKER_ACCESS_LEVELS
from .commission import commit_or_raise
from .email import EmailService

ACCOUNT_TYPES = ('bureau', 'worker')


def generate_token():
    """Random 16-byte token, hex encoded; used as a permanent, non-expiring link key"""
    return secrets.token_hex(16)


class BureauService:
    """Service for syndicate bureaus, their workers and their permanent access links"""

    @staticmethod
    def _new_token():
        # Bureau and worker links share one token space
        token = generate_token()
        while (Bureau.query.filter_by(token=token).first()
               or Worker.query.filter_by(token=token).first()):
            token = generate_token()
        return token

    @staticmethod
    def _send_link(account, reminder=False):
        interface_url = account.interface_url(current_app.config['BASE_URL'])
        try:
            if isinstance(account, Worker):
                EmailService.send_worker_link(account, interface_url, reminder=reminder)
            else:
                EmailService.send_bureau_link(account, interface_url, reminder=reminder)
            return True
        except EmailDeliveryError as e:
            current_app.logger.error(
                f"{type(account).__name__} {account.id} link email to {BureauService._email_of(account)} "
                f"failed: {str(e)}"
            )
            return False

    @staticmethod
    def _email_of(account):
        return account.email if isinstance(account, Worker) else account.president_email

    @staticmethod
    def add_bureau(name, president_email, city=None):
        """Create a bureau and email its permanent link.

        A bureau already registered for the same president is not duplicated;
        its existing link is sent again instead.
        """
        if not name or not president_email:
            raise ValueError("Bureau name and president email are required")

        existing = Bureau.query.filter_by(president_email=president_email).first()
        if existing:
            current_app.logger.info(f"Bureau already exists for {president_email}, resending its link")
            email_sent = BureauService._send_link(existing, reminder=True)
            return {'bureau': existing, 'created': False, 'email_sent': email_sent}

        bureau = Bureau(name=name, president_email=president_email, token=BureauService._new_token(), city=city)
        db.session.add(bureau)
        commit_or_raise("creating bureau")
        current_app.logger.info(f"Bureau {bureau.id} created for {president_email}")

        email_sent = BureauService._send_link(bureau)
        return {'bureau': bureau, 'created': True, 'email_sent': email_sent}

    @staticmethod
    def get_bureau(bureau_id):
        bureau = db.session.get(Bureau, bureau_id)
        if not bureau:
            raise NotFoundError(f"Bureau {bureau_id} not found")
        return bureau

    @staticmethod
    def list_bureaus():
        return Bureau.query.order_by(Bureau.created_at.desc(), Bureau.id.desc()).all()

    @staticmethod
    def add_worker(bureau_id, name, email, phone=None, access_level='limited'):
        """Add a worker to a bureau and email its own permanent link.

        Adding the same email twice to one bureau resends the existing link.
        """
        if not name or not email:
            raise ValueError("Worker name and email are required")
        if access_level not in WORKER_ACCESS_LEVELS:
            raise ValueError(f"Access level must be one of: {', '.join(WORKER_ACCESS_LEVELS)}")
        bureau = BureauService.get_bureau(bureau_id)

        existing = bureau.workers.filter_by(email=email).first()
        if existing:
            current_app.logger.info(f"Worker {email} already belongs to bureau {bureau.id}, resending its link")
            email_sent = BureauService._send_link(existing, reminder=True)
            return {'worker': existing, 'created': False, 'email_sent': email_sent}

        worker = Worker(
            bureau_id=bureau.id,
            name=name,
            email=email,
            token=BureauService._new_token(),
            phone=phone,
            access_level=access_level
        )
        db.session.add(worker)
        commit_or_raise(f"adding worker to bureau {bureau.id}")
        current_app.logger.info(f"Worker {worker.id} added to bureau {bureau.id}")

        email_sent = BureauService._send_link(worker)
        return {'worker': worker, 'created': True, 'email_sent': email_sent}

    @staticmethod
    def list_workers(bureau_id=None):
        query = Worker.query
        if bureau_id is not None:
            query = query.filter_by(bureau_id=BureauService.get_bureau(bureau_id).id)
        return query.order_by(Worker.created_at.desc(), Worker.id.desc()).all()

    @staticmethod
    def resend_link(email, account_type='bureau'):
        """Send the existing link(s) registered for ``email`` again"""
        if account_type not in ACCOUNT_TYPES:
            raise ValueError(f"Account type must be one of: {', '.join(ACCOUNT_TYPES)}")

        if account_type == 'bureau':
            accounts = Bureau.query.filter_by(president_email=email).all()
        else:
            accounts = Worker.query.filter_by(email=email).order_by(Worker.id).all()
        if not accounts:
            raise ValueError(f"No {account_type} found for {email}")

        results = [BureauService._send_link(account, reminder=True) for account in accounts]
        return {'accounts': accounts, 'email_sent': all(results)}

    @staticmethod
    def resolve_token(token):
        """Find the bureau or worker a permanent link belongs to"""
        bureau = Bureau.query.filter_by(token=token).first()
        if bureau:
            return {'type': 'bureau', 'bureau': bureau}
        worker = Worker.query.filter_by(token=token).first()
        if worker:
            return {'type': 'worker', 'worker': worker, 'bureau': worker.bureau}
        raise NotFoundError("Unknown access link")
