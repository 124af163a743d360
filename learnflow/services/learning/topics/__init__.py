"""トピックドメイン."""

from learnflow.services.learning.topics.actions import TopicActions
from learnflow.services.learning.topics.controller import TopicController
from learnflow.services.learning.topics.models import Topic


__all__ = ["Topic", "TopicActions", "TopicController"]
