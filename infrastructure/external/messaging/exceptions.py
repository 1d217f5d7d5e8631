class MessagingError(Exception):
    pass


class SerializationError(MessagingError):
    pass


class PublishError(MessagingError):
    pass


class BrokerConnectionError(PublishError):
    """Broker unreachable or connection/authentication refused."""


class QueueDeclarationError(PublishError):
    """Queue declaration rejected, e.g. existing queue with incompatible arguments."""
