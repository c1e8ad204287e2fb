"""
Flask application factory.

Creates and configures the Flask app, registers all blueprints.
"""
import logging

from flask import Flask, jsonify, request, session, redirect, render_template_string
from werkzeug.exceptions import HTTPException

from nextaction.errors import NextActionError

logger = logging.getLogger('nextaction')


def create_app():
    """Create and configure the Flask application."""
    from nextaction.logging_config import configure_logging
    from nextaction.config import SECRET_KEY, DASHBOARD_PASSWORD
    from nextaction.database import import_models

    app = Flask(__name__)

    configure_logging(app)

    app.secret_key = SECRET_KEY

    # ── Simple password auth ────────────────────────────────────────────
    LOGIN_PAGE = '''
    <!DOCTYPE html>
    <html lang="en">
    <head><meta charset="UTF-8"><title>Login — Next Best Actions</title></head>
    <body>
        <h1>Next Best Actions</h1>
        {% if error %}<p>Wrong password</p>{% endif %}
        <form method="POST" action="/login">
            <input type="password" name="password" autofocus placeholder="Password">
            <button type="submit">Log in</button>
        </form>
    </body>
    </html>
    '''

    OPEN_PATHS = {'/health', '/login'}

    @app.before_request
    def require_login():
        if not DASHBOARD_PASSWORD:
            return  # No password set — open access (local dev)
        if request.path in OPEN_PATHS:
            return
        if session.get('authenticated'):
            return
        if request.path.startswith('/api/'):
            return jsonify({'error': 'Authentication required', 'type': 'Unauthorized'}), 401
        return redirect('/login')

    @app.route('/login', methods=['GET', 'POST'])
    def login():
        if request.method == 'POST':
            if request.form.get('password') == DASHBOARD_PASSWORD:
                session['authenticated'] = True
                return redirect('/health')
            return render_template_string(LOGIN_PAGE, error=True)
        return render_template_string(LOGIN_PAGE, error=False)

    @app.route('/logout')
    def logout():
        session.clear()
        return redirect('/login')

    # ── Error handling ──────────────────────────────────────────────────
    @app.errorhandler(NextActionError)
    def handle_domain_error(e):
        logger.info("%s on %s %s: %s", type(e).__name__, request.method, request.path, e.message)
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        if isinstance(e, HTTPException):
            return e
        logger.error("Unhandled error on %s %s", request.method, request.path, exc_info=True)
        return jsonify({'error': str(e), 'type': 'InternalError'}), 500

    # Register blueprints
    from nextaction.routes.dashboard import bp as dashboard_bp
    from nextaction.routes.leads import bp as leads_bp
    from nextaction.routes.actions import bp as actions_bp
    from nextaction.routes.rules import bp as rules_bp

    app.register_blueprint(dashboard_bp)
    app.register_blueprint(leads_bp)
    app.register_blueprint(actions_bp)
    app.register_blueprint(rules_bp)

    # Schema is managed by Alembic, no create_all() here
    import_models()

    return app
