# dishcart/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///.tmp/data.db")
REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")

#redis | local (local = locki w procesie, tylko jeden worker)
LOCK_BACKEND = os.getenv("LOCK_BACKEND", "redis")
CART_LOCK_TTL_SECONDS = int(os.getenv("CART_LOCK_TTL_SECONDS", 10))
CART_LOCK_WAIT_SECONDS = float(os.getenv("CART_LOCK_WAIT_SECONDS", 5))

#bez klucza checkout dziala bez autoryzacji platnosci
STRIPE_KEY = os.getenv("STRIPE_KEY") or None
STRIPE_API_BASE = os.getenv("STRIPE_API_BASE", "https://api.stripe.com")
PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "rsd")
PAYMENT_TIMEOUT_SECONDS = float(os.getenv("PAYMENT_TIMEOUT_SECONDS", 10))
