import os

from waitress import serve
from tischplan.app import app


def main():
    host = os.environ.get('TISCHPLAN_HOST', '127.0.0.1')
    port = int(os.environ.get('TISCHPLAN_PORT', '5001'))
    threads = int(os.environ.get('TISCHPLAN_THREADS', '4'))
    app.logger.info(f"Starte Tischplan-Server mit Waitress auf http://{host}:{port}")
    serve(app, host=host, port=port, threads=threads)


if __name__ == '__main__':
    main()
