#!/usr/bin/env python3
"""
Price Sheet Generator - Development Runner
Run this script to start the development server
"""

import os
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

# Set environment defaults
os.environ.setdefault('FLASK_APP', 'pricesheet')
os.environ.setdefault('FLASK_ENV', 'development')

from pricesheet import create_app


def main():
    """Main entry point"""
    print("=" * 60)
    print("Price Sheet Generator - Development Server")
    print("=" * 60)

    app = create_app()

    print(f"Environment: {app.config.get('FLASK_ENV', 'unknown')}")
    print(f"Debug mode: {app.config.get('DEBUG', False)}")
    print(f"Log level: {app.config.get('LOG_LEVEL', 'INFO')}")
    print(f"Images folder: {app.config['IMAGES_FOLDER']}")
    print(f"Output folder: {app.config['OUTPUT_FOLDER']}")

    images_dir = Path(app.config['IMAGES_FOLDER'])
    background = images_dir / app.config['LAYOUT'].background_filename
    if not background.exists():
        print(f"No {background.name} in {images_dir}/, cards will use a plain white background.")

    port = int(os.getenv('PORT', '3000'))

    print("-" * 60)
    print("Starting development server...")
    print(f"Open your browser to: http://localhost:{port}")
    print("Press Ctrl+C to stop")
    print("-" * 60)

    app.run(
        host='0.0.0.0',
        port=port,
        debug=app.config.get('DEBUG', True),
        use_reloader=True
    )


if __name__ == '__main__':
    main()
