import logging
import sys

from catmouse import create_app, serve

app = create_app()

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.logger.setLevel(logging.INFO)
    # Use SocketIO server to enable websockets in dev
    sys.exit(serve(app))
