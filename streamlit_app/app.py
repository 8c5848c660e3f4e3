# streamlit_app/app.py

import asyncio
import logging
import time

import streamlit as st
from pydantic import ValidationError

from bookreviewhub.clients.api import BookReviewClient
from bookreviewhub.core.exceptions import ApiError
from bookreviewhub.core.log import configure_logging
from bookreviewhub.core.session import SessionHolder
from bookreviewhub.readmodel import CatalogSnapshot, ReviewFilters, SortKey, fetch_reviews, fetch_snapshot, search_books
from bookreviewhub.schemas import MAX_REVIEW_LENGTH, LoginForm, RegisterForm, ReviewCreate
from bookreviewhub import services

configure_logging()
logger = logging.getLogger(__name__)

st.set_page_config(page_title="BookReview Hub", page_icon="📚")

client = BookReviewClient()
holder = SessionHolder(st.session_state)
session = holder.load()

# --- Sidebar for Login/Registration/Logout ---
st.sidebar.title("Account")

if session:
    st.sidebar.success(f"Logged in as: {session.name} ({session.email})")
    if session.is_admin:
        st.sidebar.write("👑 (Admin)")
    if st.sidebar.button("Logout"):
        services.logout(holder)
        st.sidebar.info("Logged out.")
        time.sleep(1)
        st.rerun()
else:
    login_tab, register_tab = st.sidebar.tabs(["Login", "Register"])

    with login_tab:
        with st.form("login_form"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            submit_login = st.form_submit_button("Login")

            if submit_login:
                try:
                    form = LoginForm(email=email, password=password)
                except ValidationError:
                    st.warning("Please enter your email and password.")
                else:
                    try:
                        logged_in = asyncio.run(services.login(client, holder, form))
                        st.sidebar.success(f"Welcome back, {logged_in.name}!")
                        time.sleep(1)
                        st.rerun()
                    except ApiError as login_e:
                        st.error(login_e.message)

    with register_tab:
        with st.form("register_form"):
            reg_name = st.text_input("Name")
            reg_email = st.text_input("Email", key="register_email")
            reg_password = st.text_input("Password", type="password", key="register_password")
            reg_password_confirm = st.text_input("Confirm password", type="password")
            submit_register = st.form_submit_button("Register")

            if submit_register:
                try:
                    form = RegisterForm(
                        name=reg_name,
                        email=reg_email,
                        password=reg_password,
                        password_confirm=reg_password_confirm,
                    )
                except ValidationError as val_e:
                    st.warning(f"Please check the form: {val_e.errors()[0]['msg']}")
                else:
                    try:
                        asyncio.run(services.register(client, form))
                        st.success("Registration complete! You can now log in.")
                    except ApiError as reg_e:
                        st.error(reg_e.message)

# --- Main App Content ---
st.header("Book Catalog")

if "catalog_snapshot" not in st.session_state:
    # Each book's reviews are requested on its own; start from the catalog only.
    st.session_state.catalog_snapshot = asyncio.run(fetch_snapshot(client))
    st.session_state.loaded_review_books = set()

snapshot: CatalogSnapshot = st.session_state.catalog_snapshot

control_cols = st.columns([2, 1])
with control_cols[0]:
    book_search = st.text_input("Search by title or author:", key="book_search")
with control_cols[1]:
    review_sort = st.selectbox(
        "Sort reviews by:",
        options=[key.value for key in SortKey],
        format_func=str.capitalize,
        key="review_sort",
    )
st.divider()

visible_books = search_books(snapshot.books, book_search)

if not visible_books:
    st.warning("No books match your search, or the catalog could not be loaded.")
else:
    st.markdown(f"**{len(visible_books)} book(s) found**")
    for book in visible_books:
        with st.expander(f"{book.title} ({book.author})"):
            # Expander bodies run even when collapsed; each book's reviews are requested once per session.
            if book.id not in st.session_state.loaded_review_books:
                book_reviews = asyncio.run(fetch_reviews(client, book.id))
                snapshot = snapshot.with_book_reviews(book.id, book_reviews)
                st.session_state.catalog_snapshot = snapshot
                st.session_state.loaded_review_books.add(book.id)

            view = snapshot.compose(ReviewFilters(book_filter=book.id, sort_by=review_sort))
            aggregate = view.aggregate_for(book.id)

            main_cols = st.columns([1, 3])
            with main_cols[0]:
                if book.image_url:
                    st.image(book.image_url, width=150, caption=f"Cover of {book.title}")
                else:
                    st.caption("🖼 No cover")

            with main_cols[1]:
                st.subheader(book.title)
                st.write(f"**Author:** {book.author}")
                if aggregate.review_count:
                    st.metric(label="Average rating", value=f"{aggregate.display_rating} / 5")
                    st.write("⭐" * aggregate.stars)
                    st.caption(f"{aggregate.review_count} review(s)")
                else:
                    st.caption("📊 Not rated yet")

            st.caption(book.summary or book.description)
            st.divider()

            st.markdown("#### Reviews")
            if not view.reviews:
                st.info("No reviews for this book yet. Be the first!")
            else:
                for review in view.reviews:
                    st.markdown(f"**{review.user_name}** ({review.timestamp.strftime('%Y-%m-%d %H:%M')}):")
                    st.write("⭐" * review.rating)
                    st.caption(f"> {review.content}")
                    st.markdown("---")

            if session:
                st.markdown("#### Write a review")
                with st.form(key=f"review_form_{book.id}"):
                    rating = st.slider("Your rating (stars):", 1, 5, 3)
                    content = st.text_area(
                        "Your review:",
                        max_chars=MAX_REVIEW_LENGTH,
                        help=f"Up to {MAX_REVIEW_LENGTH} characters.",
                    )
                    submit_review = st.form_submit_button("Submit review")

                    if submit_review:
                        try:
                            form = ReviewCreate(book_id=book.id, rating=rating, content=content)
                        except ValidationError:
                            st.warning("Please provide both a rating and review content.")
                        else:
                            try:
                                st.session_state.catalog_snapshot = asyncio.run(
                                    services.submit_review(client, snapshot, form, session)
                                )
                                st.success("Your review has been submitted successfully.")
                                time.sleep(1)
                                st.rerun()
                            except ApiError as review_e:
                                logger.warning(f"Review submission for book {book.id} failed: {review_e.message}")
                                st.error(review_e.message)
