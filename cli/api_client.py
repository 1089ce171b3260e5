"""REST API client for auralingo server."""

import requests


class AuralingoAPIClient:
    """Client for communicating with the auralingo REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        data = dict(data or {})
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_topics(self) -> list[dict]:
        return self._get("/api/topics")['topics']

    def start_quiz(self, topic_id: str, mode: str = '') -> dict:
        """Start a quiz and return its first question."""
        return self._post("/api/quiz/start", {'topic_id': topic_id, 'mode': mode})

    def get_question(self) -> dict:
        return self._get("/api/quiz/question")

    def answer(self, option: str) -> dict:
        """Submit an answer for the current question."""
        return self._post("/api/quiz/answer", {'option': option})

    def abandon_quiz(self) -> dict:
        return self._post("/api/quiz/abandon")

    def get_progress(self) -> dict:
        """Get XP, streak and learned words."""
        return self._get("/api/progress")

    def get_favorites(self) -> list[dict]:
        return self._get("/api/favorites")['words']
