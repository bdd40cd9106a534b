import pytest

from services.review_service.schemas import ReviewCreate
from services.review_service.service import ANONYMOUS_READER, ReviewService, to_review_response
from shared.errors import BookNotFound, UserNotFound, ValidationError


async def test_add_and_list_reviews(db, session_factory, make_user, make_book):
    user = await make_user(display_name="Bookworm")
    book = await make_book()

    review = await ReviewService.add_review(db, user.id, book.id, ReviewCreate(rating=5, content="Loved it"))
    view = to_review_response(review)
    assert view.username == "Bookworm"
    assert view.rating == 5

    async with session_factory() as fresh:
        listed = await ReviewService.list_reviews(fresh, book.id)
    assert [(r.review_id, r.username, r.content) for r in listed] == [(review.id, "Bookworm", "Loved it")]


@pytest.mark.parametrize("rating", [0, 6])
async def test_rating_out_of_range_is_rejected(db, make_user, make_book, rating):
    user = await make_user()
    book = await make_book()

    with pytest.raises(ValidationError, match="between 1 and 5"):
        await ReviewService.add_review(db, user.id, book.id, ReviewCreate(rating=rating))


async def test_review_requires_existing_user_and_book(db, make_user, make_book):
    book = await make_book()
    book_id = book.id
    with pytest.raises(UserNotFound):
        await ReviewService.add_review(db, 999, book_id, ReviewCreate(rating=3))

    user = await make_user()
    with pytest.raises(BookNotFound):
        await ReviewService.add_review(db, user.id, 999, ReviewCreate(rating=3))


async def test_review_without_author_shows_anonymous_name(db, session_factory, make_book):
    from services.review_service.models import Review

    book = await make_book()
    db.add(Review(user_id=None, book_id=book.id, rating=4, content="Anonymous praise"))
    await db.commit()

    async with session_factory() as fresh:
        [view] = await ReviewService.list_reviews(fresh, book.id)
    assert view.username == ANONYMOUS_READER
