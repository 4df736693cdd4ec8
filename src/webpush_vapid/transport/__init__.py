from webpush_vapid.transport.aio import AsyncWebPushClient
from webpush_vapid.transport.base import PushRequest, build_push_request
from webpush_vapid.transport.sync import WebPushClient

__all__ = [
    "AsyncWebPushClient",
    "PushRequest",
    "WebPushClient",
    "build_push_request",
]
