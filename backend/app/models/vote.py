# app/models/vote.py
from tortoise import fields, models

class Vote(models.Model):
    """
    One member's upvote on one idea.
    - (user, idea) is unique: a member holds at most one vote per idea
    - Removing either the user or the idea removes the vote
    """
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="votes", on_delete=fields.CASCADE)
    idea = fields.ForeignKeyField("models.Idea", related_name="votes", on_delete=fields.CASCADE)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "votes"
        unique_together = (("user", "idea"),)
