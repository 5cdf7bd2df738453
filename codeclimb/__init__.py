from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from codeclimb.config import Config
from flask_migrate import Migrate


db = SQLAlchemy()
migrate = Migrate()
bcrypt = Bcrypt()
login_manager = LoginManager()
login_manager.login_view = 'users.login'
login_manager.login_message_category = 'info'


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    db.init_app(app)
    bcrypt.init_app(app)
    login_manager.init_app(app)
    migrate.init_app(app, db)

    from codeclimb.users.routes import users
    from codeclimb.main.routes import main
    from codeclimb.learn import learn
    from codeclimb.errors.handlers import errors

    app.register_blueprint(users)
    app.register_blueprint(main)
    app.register_blueprint(learn)
    app.register_blueprint(errors)

    # ── Track registry context processor ─────────────────────────────────────
    # Every template gets the track list for the navigation bar.
    @app.context_processor
    def inject_tracks():
        from codeclimb.learn.curriculum import list_tracks
        return {
            "nav_tracks": list_tracks(),
            "max_level": app.config["MAX_LEVEL"],
        }

    return app
