from core.config import configure_logging
from handlers.public_booking import handle_event

configure_logging()


def lambda_handler(event, context):
    return handle_event(event)
