from flask import Blueprint

# Every route is served under /api
api_bp = Blueprint("api", __name__)

# Import route modules so they register with api_bp
from . import health
from . import auth
from . import products
from . import blog
from . import about_sections
from . import contact_links
from . import page_content
