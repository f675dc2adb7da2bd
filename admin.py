import streamlit as st
import pandas as pd

from app.services.booking_store import BookingStore
from app.services.storage import storage_for_user

# Page Config
st.set_page_config(
    page_title="Care.xyz Admin",
    page_icon="📅",
    layout="centered"
)

st.title("Care.xyz - Admin Panel")

def load_data(email: str):
    store = BookingStore(storage_for_user(email))
    bookings = store.load()
    if not bookings:
        return None

    rows = []
    for b in bookings:
        row = b.model_dump(mode="json", exclude={"location"})
        row["location"] = ", ".join(part for part in (b.location.area, b.location.city, b.location.district, b.location.division) if part)
        rows.append(row)
    # Newest first
    return pd.DataFrame(rows).sort_values("id", ascending=False)

email = st.text_input("User email")

if st.button("Refresh"):
    st.rerun()

df = load_data(email) if email else None

if df is not None and not df.empty:
    total_bookings = len(df)
    cancelled = int((df["status"] == "Cancelled").sum())

    col1, col2, col3 = st.columns(3)
    col1.metric("Bookings", total_bookings)
    col2.metric("Cancelled", cancelled)
    col3.metric("Revenue (pending)", f"${df.loc[df['status'] == 'Pending', 'totalCost'].sum():g}")

    st.subheader("Bookings")
    st.dataframe(
        df,
        use_container_width=True,
        column_config={
            "id": "ID",
            "serviceName": "Service",
            "duration": "Hours",
            "location": "Location",
            "totalCost": st.column_config.NumberColumn("Total", format="$%.2f"),
            "status": "Status",
            "createdAt": "Created",
        }
    )
else:
    st.info("No bookings yet for this user, or storage is disabled.")

st.markdown("---")
st.caption("Care.xyz • Baby Sitting & Elderly Care")
