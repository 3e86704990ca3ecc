# eventa/config.py
from decouple import config

API_URL = config("EVENTA_API_URL", default="http://10.0.2.2:8080/api")
HTTP_TIMEOUT = config("EVENTA_HTTP_TIMEOUT", default=10.0, cast=float)

# Where the bearer token, cached user and chat history are kept between runs
STORAGE_DIR = config("EVENTA_STORAGE_DIR", default="~/.eventa")

RESERVATION_MINUTES = config("EVENTA_RESERVATION_MINUTES", default=15, cast=int)

# The payment provider redirects the embedded page to one of these when done
PAYMENT_SUCCESS_URL = config("EVENTA_PAYMENT_SUCCESS_URL", default="https://url.ngrok-free.app/success")
PAYMENT_CANCEL_URL = config("EVENTA_PAYMENT_CANCEL_URL", default="https://url.ngrok-free.app/cancel")

# Only customer accounts may use the mobile client
ALLOWED_ROLE = config("EVENTA_ALLOWED_ROLE", default="ROLE_customer")

LOG_LEVEL = config("EVENTA_LOG_LEVEL", default="INFO")
