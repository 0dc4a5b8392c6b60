from flask import Flask, jsonify
from flask_cors import CORS  # Import CORS
from config.settings import Config
from utils.mongodb import DB_EXTENSION_KEY, connect, logger
from routes.onboarding_routes import onboarding_bp
from routes.admin_routes import admin_bp
from routes.user_info_route import user_bp
from services.config_service import ensure_default_config
from services.user_crud_service import ensure_user_indexes


def create_app(db=None, seed_config=True):
    """
    Build the Flask app around a MongoDB database.

    ``db`` is injected by tests; otherwise a connection is opened from Config.
    """
    app = Flask(__name__)
    app.config["DEBUG"] = Config.FLASK_DEBUG

    # Enable CORS for the wizard and admin frontends
    CORS(app,
         origins=Config.CORS_ORIGINS,
         methods=Config.CORS_METHODS,
         allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
         supports_credentials=True
    )

    if db is None:
        db = connect()
    app.extensions[DB_EXTENSION_KEY] = db

    try:
        ensure_user_indexes(db)
    except Exception:
        logger.error("Could not create the unique email index", exc_info=True)

    if seed_config:
        try:
            ensure_default_config(db)
        except Exception:
            # The wizard still runs on the built-in default
            logger.error("Could not seed default onboarding configuration", exc_info=True)

    @app.route('/')
    def home():
        return jsonify({"message": "Onboarding backend is running!"})

    # Register Blueprints
    app.register_blueprint(onboarding_bp, url_prefix='/onboarding')
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(user_bp, url_prefix='/data')

    return app


if __name__ == '__main__':
    create_app().run(host='0.0.0.0', port=Config.PORT)
