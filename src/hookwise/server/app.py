"""
FastAPI application exposing both webhook endpoints.

Each endpoint verifies the request, answers immediately and hands the
verified event to a background worker, so provider redelivery timeouts are
never hit by downstream processing.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request, Response

from hookwise import __version__
from hookwise.core.config import PROVIDER_RESEND, PROVIDER_STRIPE, Config
from hookwise.core.exceptions import (
    ConfigurationError,
    DecodeError,
    TransportError,
    VerificationError,
)
from hookwise.core.logging import get_logger
from hookwise.resend import webhook as resend_webhook
from hookwise.resend.dispatch import ResendDispatcher, default_dispatcher
from hookwise.stripe import webhook as stripe_webhook
from hookwise.stripe.dispatch import StripeDispatcher
from hookwise.stripe.router import EventRouter
from hookwise.verifiers import SignatureVerifier, StripeVerifier, SvixVerifier
from hookwise.worker import EventWorker

logger = get_logger("server")

# Every method reaches the handler so non-POST gets an explicit 405
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _router(config: Config) -> EventRouter:
    try:
        return EventRouter(enabled=config.stripe_families)
    except ValueError as e:
        raise ConfigurationError(f"HOOKWISE_STRIPE_FAMILIES: {e}") from e


def create_app(
    config: Config,
    resend_verifier: SignatureVerifier | None = None,
    stripe_verifier: SignatureVerifier | None = None,
    resend_dispatcher: ResendDispatcher | None = None,
    stripe_dispatcher: StripeDispatcher | None = None,
) -> FastAPI:
    """
    Build the receiver application.

    Verifiers are constructed here, once, from the configured secrets unless
    injected. A bad secret raises ConfigurationError before the app exists.
    """
    workers: list[EventWorker] = []

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        for worker in workers:
            worker.start()
        logger.info(f"Serving providers: {', '.join(config.providers)}")
        yield
        for worker in workers:
            await worker.stop()
        logger.info("Workers stopped")

    app = FastAPI(title="hookwise", version=__version__, lifespan=lifespan)

    @app.get("/health", tags=["Health"])
    async def health() -> dict:
        return {"status": "ok", "providers": list(config.providers)}

    if config.is_enabled(PROVIDER_RESEND):
        verifier = resend_verifier or SvixVerifier(config.resend_secret or "")
        logger.info(f"resend: secret {Config.masked_secret(config.resend_secret)}")
        dispatcher = resend_dispatcher or default_dispatcher()
        resend_worker: EventWorker = EventWorker(dispatcher.dispatch, name=PROVIDER_RESEND)
        workers.append(resend_worker)
        app.state.resend_worker = resend_worker

        @app.api_route(config.resend_path, methods=ALL_METHODS, include_in_schema=False)
        async def resend_endpoint(request: Request) -> Response:
            logger.debug(f"resend: {request.method} {request.url.path}")
            try:
                payload = await resend_webhook.receive(
                    request.method,
                    request.headers,
                    request.stream(),
                    verifier,
                    max_body_bytes=config.max_body_bytes,
                )
            except TransportError as e:
                logger.warning(f"resend: rejected request: {e}")
                return Response(status_code=e.status_code)
            except VerificationError as e:
                logger.warning(f"resend: error processing request: {e}")
                return Response(status_code=HTTPStatus.BAD_REQUEST)
            except DecodeError as e:
                # Signature was valid; a non-2xx would only trigger redelivery
                logger.error(f"resend: undecodable payload acknowledged: {e}")
                return Response(status_code=HTTPStatus.OK)

            logger.info(f"resend: received {payload.type}")
            resend_worker.submit(payload)
            return Response(status_code=HTTPStatus.OK)

    if config.is_enabled(PROVIDER_STRIPE):
        s_verifier = stripe_verifier or StripeVerifier(
            config.stripe_secret or "", tolerance=config.stripe_tolerance
        )
        logger.info(f"stripe: secret {Config.masked_secret(config.stripe_secret)}")
        s_dispatcher = stripe_dispatcher or StripeDispatcher(_router(config))
        stripe_worker: EventWorker = EventWorker(s_dispatcher.dispatch, name=PROVIDER_STRIPE)
        workers.append(stripe_worker)
        app.state.stripe_worker = stripe_worker

        @app.api_route(config.stripe_path, methods=ALL_METHODS, include_in_schema=False)
        async def stripe_endpoint(request: Request) -> Response:
            logger.debug(f"stripe: {request.method} {request.url.path}")
            try:
                event = await stripe_webhook.handle_request(
                    request.method,
                    request.headers,
                    request.stream(),
                    s_verifier,
                    max_body_bytes=config.max_body_bytes,
                )
            except TransportError as e:
                logger.warning(f"stripe: rejected request: {e}")
                return Response(status_code=e.status_code)
            except (VerificationError, DecodeError) as e:
                logger.warning(f"stripe: error processing request: {e}")
                return Response(status_code=HTTPStatus.BAD_REQUEST)

            logger.info(f"stripe: received {event.type} ({event.id})")
            stripe_worker.submit(event)
            # immediately respond with 200 so stripe does not redeliver
            return Response(status_code=HTTPStatus.OK)

    return app
