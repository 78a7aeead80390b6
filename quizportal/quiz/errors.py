"""Domain errors raised by the quiz submission flow."""


class QuizPortalError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidPayloadError(QuizPortalError):
    status_code = 400


class QuizNotFoundError(QuizPortalError):
    status_code = 404

    def __init__(self, quiz_id: str):
        super().__init__("Quiz not found")
        self.quiz_id = quiz_id


class QuizInactiveError(QuizPortalError):
    status_code = 400

    def __init__(self, quiz_id: str):
        super().__init__("Quiz is not active")
        self.quiz_id = quiz_id
