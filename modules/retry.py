from json.decoder import JSONDecodeError


class DataBaseError(Exception): pass

class AuthExhaustedError(Exception): pass


class ResponseError(Exception):
    label: str = "request failed"

    def __init__(self, status: int, body: str):
        super().__init__(f"{self.label}: {status} - {body[:350]}")
        self.status = status
        self.body = body

class QuotaQueryError(ResponseError):
    label = "Failed to get rate limits"

class DispatchError(ResponseError):
    label = "Send message failed"

class ThreadInvalidError(DispatchError): pass

class SessionInvalidError(DispatchError): pass


THREAD_ERROR_MARKERS = ("thread", "not found")
SESSION_ERROR_MARKERS = ("authentication", "session")


def is_thread_error(err: Exception):
    return isinstance(err, ThreadInvalidError) or any(marker in str(err).lower() for marker in THREAD_ERROR_MARKERS)


def is_session_error(err: Exception):
    return isinstance(err, SessionInvalidError) or any(marker in str(err).lower() for marker in SESSION_ERROR_MARKERS)


def have_json(func):
    async def wrapper(*args, **kwargs):
        response = await func(*args, **kwargs)
        try:
            response.json()
        except JSONDecodeError:
            error_msg = response.text[:350].replace("\n", " ")
            raise Exception(f'bad json response: {error_msg}')

        return response
    return wrapper
