"""Tests for the post and vote repositories."""

import pytest
from sqlalchemy import delete, update

from hottakes.core.errors import VoteConflictError
from hottakes.models import Vote, VoteValue
from hottakes.repositories.post_repo import PostRepository
from hottakes.repositories.vote_repo import VoteRepository
from hottakes.services.vote_resolver import CounterDelta


def test_create_and_lookup(db_session, test_user) -> None:
    repo = PostRepository(db_session)
    post = repo.create(owner_id=test_user.id, content="Mornings are overrated")
    db_session.commit()

    assert repo.reload(post.id).content == "Mornings are overrated"
    assert repo.get_visible(post.id) is not None

    repo.soft_delete(post)
    db_session.commit()

    assert repo.get_visible(post.id) is None
    assert repo.reload(post.id).deleted is True


def test_list_page_orders_newest_first(db_session, test_user, other_user, post_factory) -> None:
    posts = [post_factory(test_user, f"Take number {i:02d}") for i in range(4)]
    foreign = post_factory(other_user, "Somebody else's take")
    repo = PostRepository(db_session)

    ids = [post.id for post in repo.list_page(10)]
    assert ids == [foreign.id] + [post.id for post in reversed(posts)]

    ids = [post.id for post in repo.list_page(10, after=posts[2].id, owner_id=test_user.id)]
    assert ids == [posts[1].id, posts[0].id]


def test_apply_counter_delta_is_relative(db_session, test_post) -> None:
    repo = PostRepository(db_session)
    repo.apply_counter_delta(test_post.id, CounterDelta(agree=1))
    repo.apply_counter_delta(test_post.id, CounterDelta(agree=1, disagree=1))
    repo.apply_counter_delta(test_post.id, CounterDelta(agree=-1))
    db_session.commit()

    post = repo.reload(test_post.id)
    assert (post.agree_count, post.disagree_count) == (1, 1)


def test_set_counters_overwrites(db_session, test_post) -> None:
    repo = PostRepository(db_session)
    repo.set_counters(test_post.id, agree=4, disagree=2)
    db_session.commit()

    post = repo.reload(test_post.id)
    assert (post.agree_count, post.disagree_count) == (4, 2)


def test_duplicate_vote_raises_conflict(db_session, test_user, test_post) -> None:
    repo = VoteRepository(db_session)
    repo.insert(user_id=test_user.id, post_id=test_post.id, value=VoteValue.AGREE)
    db_session.commit()

    with pytest.raises(VoteConflictError):
        repo.insert(user_id=test_user.id, post_id=test_post.id, value=VoteValue.DISAGREE)
    db_session.rollback()

    assert repo.get_for(test_user.id, test_post.id).value is VoteValue.AGREE


def test_values_for_posts_and_counts(db_session, test_user, other_user, post_factory) -> None:
    first = post_factory(other_user, "First take in the list")
    second = post_factory(other_user, "Second take in the list")
    third = post_factory(other_user, "Third take in the list")
    repo = VoteRepository(db_session)
    repo.insert(user_id=test_user.id, post_id=first.id, value=VoteValue.AGREE)
    repo.insert(user_id=test_user.id, post_id=third.id, value=VoteValue.DISAGREE)
    repo.insert(user_id=other_user.id, post_id=first.id, value=VoteValue.AGREE)
    db_session.commit()

    assert repo.values_for_posts(test_user.id, [first.id, second.id, third.id]) == {
        first.id: VoteValue.AGREE,
        third.id: VoteValue.DISAGREE,
    }
    assert repo.values_for_posts(test_user.id, []) == {}
    assert repo.count_by_value(first.id) == (2, 0)
    assert repo.count_by_value(second.id) == (0, 0)


def test_update_and_delete(db_session, test_user, test_post) -> None:
    repo = VoteRepository(db_session)
    vote = repo.insert(user_id=test_user.id, post_id=test_post.id, value=VoteValue.AGREE)
    repo.update_value(vote, VoteValue.DISAGREE)
    db_session.commit()
    assert repo.count_by_value(test_post.id) == (0, 1)

    repo.delete(vote)
    db_session.commit()
    assert repo.get_for(test_user.id, test_post.id) is None


def test_delete_of_changed_vote_conflicts(db_session, test_user, test_post) -> None:
    repo = VoteRepository(db_session)
    vote = repo.insert(user_id=test_user.id, post_id=test_post.id, value=VoteValue.AGREE)
    vote_id = vote.id
    db_session.commit()

    # Another request removes the row after this session read it.
    stale = repo.get_for(test_user.id, test_post.id)
    db_session.execute(
        delete(Vote)
        .where(Vote.id == vote_id)
        .execution_options(synchronize_session=False)
    )

    with pytest.raises(VoteConflictError):
        repo.delete(stale)
    db_session.rollback()

    assert repo.get_for(test_user.id, test_post.id).value is VoteValue.AGREE


def test_flip_of_changed_vote_conflicts(db_session, test_user, test_post) -> None:
    repo = VoteRepository(db_session)
    repo.insert(user_id=test_user.id, post_id=test_post.id, value=VoteValue.AGREE)
    db_session.commit()

    # Another request flips the row after this session read it.
    stale = repo.get_for(test_user.id, test_post.id)
    db_session.execute(
        update(Vote)
        .where(Vote.id == stale.id)
        .values(value=VoteValue.DISAGREE)
        .execution_options(synchronize_session=False)
    )

    with pytest.raises(VoteConflictError):
        repo.update_value(stale, VoteValue.DISAGREE)
    db_session.rollback()
