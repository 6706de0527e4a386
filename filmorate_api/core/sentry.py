import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration


def init_sentry(dsn: str, environment: str = "dev",
                service: str = "filmorate") -> bool:
    """Enable Sentry if a DSN is configured. Returns whether it was enabled."""
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[
            # 4xx доменные ошибки в Sentry не шлём, только 5xx
            FastApiIntegration(),
            LoggingIntegration(level=None, event_level=None),
        ],
        traces_sample_rate=0.2,
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", service)
    return True
