from flask import Blueprint
from .routes.commissions import bp as commissions_bp
from .routes.agents import bp as agents_bp
from .routes.reviews import bp as reviews_bp
from .routes.bureaus import bp as bureaus_bp
from .routes.carriers import bp as carriers_bp

bp = Blueprint('api_v1', __name__, url_prefix='/api/v1')

# Register API route blueprints
bp.register_blueprint(commissions_bp, url_prefix='/commissions')
bp.register_blueprint(agents_bp, url_prefix='/agents')
bp.register_blueprint(reviews_bp)
bp.register_blueprint(bureaus_bp, url_prefix='/bureaus')
bp.register_blueprint(carriers_bp, url_prefix='/carriers')
