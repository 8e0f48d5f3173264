from .schemas import BacklogStrategy, Message, SubscriptionOptions, CreateTopicRequest
