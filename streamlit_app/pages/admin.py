# streamlit_app/pages/admin.py

import asyncio
import logging
import time

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from bookreviewhub.clients.api import BookReviewClient
from bookreviewhub.core.exceptions import ApiError
from bookreviewhub.core.log import configure_logging
from bookreviewhub.core.session import SessionHolder
from bookreviewhub.readmodel import ALL_BOOKS, CatalogSnapshot, ReviewFilters, SortKey, book_title, fetch_snapshot, search_books
from bookreviewhub.schemas import BookCreate
from bookreviewhub import services

configure_logging()
logger = logging.getLogger(__name__)

client = BookReviewClient()
holder = SessionHolder(st.session_state)
session = holder.load()

# --- Authorization Check ---
# The backend enforces admin rights; this only hides the page from other users.
if session is None or not session.is_admin:
    st.error("🚫 Access Denied. You must be logged in as an administrator to view this page.")
    st.stop()
# --- End Authorization Check ---

st.title("🔑 Admin Panel")
st.caption(f"Welcome, {session.name}!")

reload_requested = st.sidebar.button("🔄 Reload data")
if "admin_snapshot" not in st.session_state or reload_requested:
    st.session_state.admin_snapshot = asyncio.run(fetch_snapshot(client, token=session.token))
if "confirming_delete_book_id" not in st.session_state:
    st.session_state.confirming_delete_book_id = None
if "confirming_delete_review_id" not in st.session_state:
    st.session_state.confirming_delete_review_id = None

snapshot: CatalogSnapshot = st.session_state.admin_snapshot

admin_option = st.radio(
    "Select View:",
    ["Dashboard", "Manage Books", "Add Book", "Review Management"],
    key="admin_view_selector",
    horizontal=True,
)

st.divider()

if admin_option == "Dashboard":
    view = snapshot.compose()
    stat_cols = st.columns(3)
    stat_cols[0].metric("Total Books", view.stats.total_books)
    stat_cols[1].metric("Total Reviews", view.stats.total_reviews)
    stat_cols[2].metric("Average Rating", f"{view.stats.display_rating} / 5")

    st.subheader("Recent Activity")
    if not view.recent:
        st.info("No reviews yet.")
    for activity in view.recent:
        review = activity.review
        st.markdown(
            f"**{review.user_name}** reviewed *{activity.book_title}* "
            f"{'⭐' * review.rating} ({review.timestamp.strftime('%Y-%m-%d %H:%M')})"
        )
        st.caption(review.content)

elif admin_option == "Manage Books":
    st.subheader("Manage Books")
    search_book_term = st.text_input("Search by title or author:", key="admin_book_search")
    view = snapshot.compose()
    books_to_display = search_books(snapshot.books, search_book_term)

    st.markdown(f"**Total: {len(snapshot.books)} book(s), {len(books_to_display)} shown**")
    if not books_to_display:
        st.info("No books match the search.")
    for book in books_to_display:
        aggregate = view.aggregate_for(book.id)
        with st.container(border=True):
            col_info, col_actions = st.columns([4, 1])
            with col_info:
                st.markdown(f"**{book.title}** by {book.author}")
                rating_text = f" | ★ {aggregate.display_rating}/5" if aggregate.review_count else ""
                st.caption(f"{aggregate.review_count} review(s){rating_text}")

            with col_actions:
                if st.session_state.confirming_delete_book_id == book.id:
                    st.warning("This also deletes all its reviews. Sure?")
                    confirm_cols = st.columns(2)
                    if confirm_cols[0].button("✅ Yes", key=f"confirm_delete_book_{book.id}"):
                        st.session_state.confirming_delete_book_id = None
                        try:
                            st.session_state.admin_snapshot = asyncio.run(
                                services.delete_book(client, snapshot, book.id, session)
                            )
                            st.success(f'"{book.title}" has been deleted.')
                        except ApiError as del_e:
                            logger.warning(f"Deleting book {book.id} failed: {del_e.message}")
                            st.error(del_e.message)
                        else:
                            time.sleep(1)
                            st.rerun()
                    if confirm_cols[1].button("❌ No", key=f"cancel_delete_book_{book.id}"):
                        st.session_state.confirming_delete_book_id = None
                        st.rerun()
                elif st.button("🗑️ Delete", key=f"delete_book_{book.id}"):
                    st.session_state.confirming_delete_book_id = book.id
                    st.rerun()

elif admin_option == "Add Book":
    st.subheader("Add Book")
    with st.form("add_book_form"):
        title = st.text_input("Title *")
        author = st.text_input("Author *")
        description = st.text_area("Description *")
        image_url = st.text_input("Cover image URL")
        submit_book = st.form_submit_button("Add Book")

        if submit_book:
            try:
                form = BookCreate(title=title, author=author, description=description, image_url=image_url)
            except ValidationError:
                st.warning("Please fill in all required fields.")
            else:
                try:
                    asyncio.run(services.add_book(client, form, session))
                    st.success(f'"{form.title}" has been added to the library.')
                    st.session_state.admin_snapshot = asyncio.run(fetch_snapshot(client, token=session.token))
                except ApiError as add_e:
                    st.error(add_e.message)

elif admin_option == "Review Management":
    st.subheader("Review Management")

    col_search_rev, col_book_rev, col_sort_rev = st.columns([2, 2, 1])
    with col_search_rev:
        search_review_term = st.text_input("Search by reviewer or content:", key="review_search")
    with col_book_rev:
        book_options = [ALL_BOOKS] + [b.id for b in snapshot.books]
        selected_book = st.selectbox(
            "Book:",
            options=book_options,
            format_func=lambda opt: "All books" if opt == ALL_BOOKS else book_title(snapshot.books, opt),
            key="review_book_filter",
        )
    with col_sort_rev:
        sort_review_option = st.selectbox(
            "Sort by:",
            options=[key.value for key in SortKey],
            format_func=str.capitalize,
            key="admin_review_sort",
        )

    view = snapshot.compose(
        ReviewFilters(search_term=search_review_term, book_filter=selected_book, sort_by=sort_review_option)
    )
    reviews_to_display = view.reviews

    st.markdown(f"--- **{len(reviews_to_display)} review(s) found** ---")

    if reviews_to_display and st.toggle("Table view", key="review_table_view"):
        df_reviews = pd.DataFrame(
            [
                {
                    "ID": r.id,
                    "Book": book_title(snapshot.books, r.book_id),
                    "User": r.user_name,
                    "Rating": r.rating,
                    "Content": r.content,
                    "Date": r.timestamp,
                }
                for r in reviews_to_display
            ]
        )
        st.dataframe(df_reviews, use_container_width=True, hide_index=True)
    elif not reviews_to_display:
        st.info("No reviews match the selected filters.")
    else:
        for review in reviews_to_display:
            with st.container(border=True):
                col_info, col_actions = st.columns([4, 1])

                with col_info:
                    st.markdown(
                        f"**{review.user_name}** on *{book_title(snapshot.books, review.book_id)}* | "
                        f"{'⭐' * review.rating} ({review.rating}) | {review.timestamp.strftime('%Y-%m-%d %H:%M')}"
                    )
                    st.caption(review.content)

                with col_actions:
                    if st.session_state.confirming_delete_review_id == review.id:
                        st.warning("Sure?")
                        confirm_cols = st.columns(2)
                        if confirm_cols[0].button("✅ Yes", key=f"confirm_delete_{review.id}"):
                            st.session_state.confirming_delete_review_id = None
                            try:
                                st.session_state.admin_snapshot = asyncio.run(
                                    services.delete_review(client, snapshot, review.id, session)
                                )
                                st.success(f"Review by {review.user_name} has been deleted.")
                            except ApiError as del_e:
                                logger.warning(f"Deleting review {review.id} failed: {del_e.message}")
                                st.error(del_e.message)
                            else:
                                time.sleep(1)
                                st.rerun()
                        if confirm_cols[1].button("❌ No", key=f"cancel_delete_{review.id}"):
                            st.session_state.confirming_delete_review_id = None
                            st.rerun()
                    elif st.button("🗑️ Delete", key=f"delete_{review.id}"):
                        st.session_state.confirming_delete_review_id = review.id
                        st.rerun()
