class OrderServiceError(Exception):
    """Base error of the order service, carries the HTTP-equivalent status code."""

    status_code = 400

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(OrderServiceError):
    status_code = 400


class ForbiddenError(OrderServiceError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class OrderNotFoundError(OrderServiceError, LookupError):
    status_code = 404

    def __init__(self, order_id):
        super().__init__(f"Order with id={order_id} not found")
        self.order_id = order_id
