"""
notifier.py - Sound cues for game outcomes.

The game never plays audio itself. A notifier is handed the outcome kind of
each accepted or rejected guess; the web notifier turns it into a cue
({url, volume}) that the browser plays and forgets about.
"""

DEFAULT_VOLUME = 0.25

DEFAULT_SOUND_URLS = {
    'success': 'https://cdn.pixabay.com/audio/2022/07/26/audio_124bfae6c2.mp3',
    'fail': 'https://cdn.pixabay.com/audio/2022/03/15/audio_115b9b7b7e.mp3',
    'invalid': 'https://cdn.pixabay.com/audio/2022/03/15/audio_115b9b7b7e.mp3',
}


class Notifier:
    """Interface: receives the outcome kind ('success', 'fail', 'invalid')."""

    def play(self, outcome):
        raise NotImplementedError


class NullNotifier(Notifier):
    def play(self, outcome):
        pass


class SoundCueNotifier(Notifier):
    """
    Records the sound cue for the last outcome so a response can carry it.
    Outcomes without a configured URL (e.g. 'none') produce no cue.
    """

    def __init__(self, urls=None, volume=DEFAULT_VOLUME):
        volume = float(volume)
        if not 0.0 <= volume <= 1.0:
            raise ValueError(f'Sound volume must be between 0 and 1, got {volume}.')
        self.urls = dict(DEFAULT_SOUND_URLS if urls is None else urls)
        self.volume = volume
        self.cue = None

    def play(self, outcome):
        url = self.urls.get(outcome)
        self.cue = {'url': url, 'volume': self.volume} if url else None
