#!/usr/bin/env python3
"""
Courseware Backend - Main application entry point
"""
from app import create_app
from scheduler import init_scheduler
import os

app = create_app()
scheduler = init_scheduler(app)

if __name__ == '__main__':
    port = int(os.getenv('PORT', 5000))
    debug = os.getenv('DEBUG', 'True').lower() == 'true'

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug
    )
