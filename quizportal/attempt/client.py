"""HTTP client for the quiz portal API."""
import logging

import requests

from quizportal.attempt.session import AttemptSession

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class PortalRequestError(RuntimeError):
    """A request to the portal failed at the transport level or with a non-2xx reply."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class SubmissionFailedError(PortalRequestError):
    """The submit request did not produce a stored submission."""


class PortalClient:
    """
    Thin wrapper over ``requests.Session``; the Flask-Login session cookie
    set by ``login()`` is reused for every later call.
    """

    def __init__(self, base_url: str, api_prefix: str = "/api", auth_prefix: str = "/api/auth",
                 timeout: float = DEFAULT_TIMEOUT, http: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.api_prefix = api_prefix
        self.auth_prefix = auth_prefix
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()

    def _request(self, method: str, url: str, error_cls=PortalRequestError, **kwargs) -> dict:
        try:
            r = self.http.request(method, self.base_url + url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise error_cls(f"{method} {url} failed: {exc}") from exc
        try:
            data = r.json()
        except ValueError:
            data = {}
        if not r.ok:
            message = data.get("error") or r.reason
            raise error_cls(f"{method} {url} returned {r.status_code}: {message}", r.status_code)
        return data

    def login(self, email: str, password: str) -> dict:
        return self._request("POST", f"{self.auth_prefix}/login",
                             json={"email": email, "password": password})

    def logout(self) -> dict:
        return self._request("POST", f"{self.auth_prefix}/logout")

    def list_quizzes(self) -> list[dict]:
        return self._request("GET", f"{self.api_prefix}/quizzes")["quizzes"]

    def get_quiz(self, quiz_id: str) -> dict:
        return self._request("GET", f"{self.api_prefix}/quizzes/{quiz_id}")["quiz"]

    def submit(self, payload: dict) -> dict:
        """POST a submission payload; returns the stored submission."""
        data = self._request("POST", f"{self.api_prefix}/submissions", SubmissionFailedError, json=payload)
        return data["submission"]

    def results(self, quiz_id: str) -> dict:
        return self._request("GET", f"{self.api_prefix}/quizzes/{quiz_id}/results")

    def my_submissions(self) -> list[dict]:
        return self._request("GET", f"{self.api_prefix}/submissions/student")["submissions"]

    def start_attempt(self, quiz_id: str) -> AttemptSession:
        """Fetch quiz content and return an attempt that submits through this client."""
        session = AttemptSession(quiz_id, submitter=self.submit)
        session.load(self.get_quiz(quiz_id))
        logger.info("Started attempt on quiz %s", quiz_id)
        return session
