"""
Public routes: Home
"""
from flask import render_template, Blueprint

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def home():
    """Home page; the access gate guarantees a signed-in user"""
    return render_template('home.html')
