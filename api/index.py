"""
Cows and Bulls - Vercel Entry Point
"""
import os

from app import create_app

# Set up Flask with correct paths for Vercel
base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
app = create_app(
    template_folder=os.path.join(base_dir, "templates"),
    static_folder=os.path.join(base_dir, "static"),
)
