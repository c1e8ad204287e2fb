"""
WSGI entry point for the next best actions API.

    gunicorn wsgi:app
"""
from nextaction import create_app

app = create_app()

if __name__ == '__main__':
    import os
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 8080)), debug=os.getenv('FLASK_DEBUG') == '1')
