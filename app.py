import logging

from event_checkin.main import create_app, get_container

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app()

if __name__ == "__main__":
    settings = get_container(app).settings
    app.run(host="0.0.0.0", port=settings.port, debug=settings.debug)
