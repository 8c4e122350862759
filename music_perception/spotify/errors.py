class SpotifyError(RuntimeError):
    pass


class NotAuthenticated(SpotifyError):
    pass


class SpotifyApiError(SpotifyError):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"Spotify API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body
