from bookflix.reading import ReviewDraft


class CreateReviewRequest(ReviewDraft):
    """Review form body; camelCase keys (``reviewText``, ``moodTags``...) are accepted."""
