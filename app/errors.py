"""Typed exceptions for the device history endpoint.

Each error carries the HTTP status and the public message sent to the
client. The underlying cause is logged where it is detected and chained
with ``raise ... from``; it never reaches the response body.
"""


class HistoryError(Exception):
    """Base class for failures that terminate a history request."""

    status_code = 500
    message = "Terjadi kesalahan pada server"

    def __init__(self, detail=None):
        super().__init__(detail or self.message)


class SessionUnavailable(HistoryError):
    """The session store could not be reached or the session could not be decoded."""

    message = "Gagal mendapatkan sesi"


class Unauthenticated(HistoryError):
    """The session carries no usable username."""

    status_code = 401
    message = "Tidak terautentikasi"


class MethodNotAllowed(HistoryError):
    status_code = 405
    message = "Metode tidak diizinkan"


class UserResolutionFailed(HistoryError):
    """No user row for the session username, or the user lookup failed."""

    message = "Gagal mengambil user ID"


class QueryFailed(HistoryError):
    message = "Gagal mengambil data riwayat"


class ScanFailed(HistoryError):
    """A history row could not be decoded into a response item."""

    message = "Gagal membaca data riwayat"


class IterationFailed(HistoryError):
    """The result cursor failed while rows were being fetched."""

    message = "Gagal mengambil data riwayat"


class EncodingFailed(HistoryError):
    message = "Gagal menyusun respons"
