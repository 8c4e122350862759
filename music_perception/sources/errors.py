class LyricsError(RuntimeError):
    pass


class LyricsLookupError(LyricsError):
    pass
