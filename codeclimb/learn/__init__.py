from flask import Blueprint

learn = Blueprint('learn', __name__)

from codeclimb.learn import routes  # noqa: E402,F401  (registers the views)
