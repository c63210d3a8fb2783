class GuardRedirect(Exception):
    def __init__(self, location: str):
        self.location = location
        super().__init__(f"Redirect to {location}")


class SessionLoading(Exception):
    """Raised while the session has not finished bootstrapping."""
