"""
schemas/ — Pydantic request/response models for the Motion API

Request bodies keep the camelCase keys the web and mobile clients send
(userId, communityId, ...) through field aliases.
"""
