# dishcart/utils/retry.py
from tenacity import (
    Retrying,
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
    wait_random,
)
import redis


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def wait_until_true(max_wait: float):
    """
    Ponawia wywolanie dopoki zwraca False, maksymalnie max_wait sekund.
    Po przekroczeniu czasu tenacity rzuca RetryError.
    Wyjatki nie sa ponawiane, ida od razu do wywolujacego.
    """
    return Retrying(
        stop=stop_after_delay(max_wait),
        wait=wait_random(min=0.02, max=0.1),
        retry=retry_if_result(lambda ok: not ok),
    )
