"""NiceGUI document dashboard: login, listing, upload and delete."""

import logging

from nicegui import app, events, ui

from lexai.client.auth import AuthClient, AuthenticationError, TokenStore
from lexai.client.documents import (
    DocumentsClient,
    count_by_status,
    filter_documents,
    page_window,
)
from lexai.client.transport import LexAIClientError
from lexai.models.schemas import DocType, DocumentPage, DocumentStatus, DocumentUpload

logger = logging.getLogger(__name__)

DOC_TYPE_LABELS = {
    DocType.CONTRACT: "Contract",
    DocType.LEGAL_BRIEF: "Legal brief",
    DocType.CASE_STUDY: "Case study",
    DocType.COMPLIANCE: "Compliance",
    DocType.RESEARCH: "Research",
    DocType.OTHER: "Other",
}


def format_file_size(size: int) -> str:
    """Human readable file size."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


@ui.page("/dashboard")
def dashboard_page() -> None:
    """Document dashboard page."""
    # Per-browser login
    tokens = TokenStore(app.storage.user)
    auth = AuthClient(tokens)
    documents = DocumentsClient(tokens)
    state: dict = {"page": 1, "listing": DocumentPage(), "search": "", "doc_type": None}

    @ui.refreshable
    def login_card() -> None:
        with ui.card().classes("w-full max-w-md mx-auto"):
            ui.label("Sign in to manage documents").classes("text-lg font-semibold")
            username = ui.input("Username").classes("w-full")
            password = ui.input("Password", password=True, password_toggle_button=True).classes(
                "w-full"
            )

            async def do_login() -> None:
                try:
                    await auth.login(username.value or "", password.value or "")
                except (AuthenticationError, ValueError) as e:
                    ui.notify(str(e), type="negative")
                    return
                await show_dashboard()

            async def do_signup() -> None:
                try:
                    await auth.signup(username.value or "", password.value or "")
                except (AuthenticationError, ValueError) as e:
                    ui.notify(str(e), type="negative")
                    return
                ui.notify("Account created successfully! Please sign in.", type="positive")

            with ui.row().classes("w-full justify-end gap-2"):
                ui.button("Sign up", on_click=do_signup).props("flat")
                ui.button("Sign in", on_click=do_login)

    @ui.refreshable
    def document_list() -> None:
        listing: DocumentPage = state["listing"]
        visible = filter_documents(listing.documents, state["search"], state["doc_type"])
        counts = count_by_status(listing.documents)

        with ui.row().classes("w-full gap-4"):
            for label, value in (
                ("Total", listing.total),
                ("Processed", counts[DocumentStatus.PROCESSED]),
                ("Processing", counts[DocumentStatus.PROCESSING]),
            ):
                with ui.card().classes("px-4 py-2"):
                    ui.label(label).classes("text-xs text-gray-500")
                    ui.label(str(value)).classes("text-xl font-semibold")

        if not visible:
            filtered = state["search"] or state["doc_type"] is not None
            ui.label(
                "No documents found" if filtered else "No documents yet"
            ).classes("text-gray-400 py-8")
        else:
            for doc in visible:
                with ui.card().classes("w-full"), ui.row().classes("w-full items-center"):
                    with ui.column().classes("flex-grow gap-0"):
                        ui.label(doc.title).classes("font-semibold")
                        ui.label(doc.description).classes("text-sm text-gray-500")
                        ui.label(
                            f"{DOC_TYPE_LABELS[doc.doc_type]} · {doc.file_name} · "
                            f"{format_file_size(doc.file_size)} · {doc.status.value}"
                        ).classes("text-xs text-gray-400")
                    ui.button(
                        icon="delete", on_click=lambda d=doc: confirm_delete(d.id)
                    ).props("flat round color=negative")

        first, last = page_window(listing.page, listing.page_size, listing.total)
        with ui.row().classes("w-full items-center justify-between"):
            ui.label(f"Showing {first} to {last} of {listing.total}").classes("text-sm")
            with ui.row().classes("gap-1"):
                for number in range(1, listing.pages + 1):
                    ui.button(
                        str(number), on_click=lambda n=number: change_page(n)
                    ).props("flat" if number != listing.page else "unelevated")

    async def load_page(page: int) -> None:
        try:
            state["listing"] = await documents.list_documents(page)
        except AuthenticationError as e:
            ui.notify(str(e), type="warning")
            show_login()
            return
        except LexAIClientError as e:
            ui.notify(str(e), type="negative")
            return
        state["page"] = state["listing"].page
        document_list.refresh()

    async def change_page(page: int) -> None:
        await load_page(page)

    async def confirm_delete(document_id: int) -> None:
        with ui.dialog() as dialog, ui.card():
            ui.label("Are you sure you want to delete this document?")
            with ui.row().classes("justify-end"):
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Delete", on_click=lambda: dialog.submit(True)).props("color=negative")
        if not await dialog:
            return
        try:
            await documents.delete_document(document_id)
        except LexAIClientError as e:
            ui.notify(str(e), type="negative")
            return
        await load_page(state["page"])

    def open_upload_dialog() -> None:
        picked: dict = {}

        async def on_upload(e: events.UploadEventArguments) -> None:
            picked["name"] = e.file.name
            picked["type"] = e.file.content_type
            picked["content"] = await e.file.read()

        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label("Upload Document").classes("text-lg font-semibold")
            ui.upload(on_upload=on_upload, auto_upload=True, max_files=1).props(
                'accept=".pdf,.csv"'
            ).classes("w-full")
            title = ui.input("Title").classes("w-full")
            description = ui.textarea("Description").classes("w-full")
            doc_type = ui.select(
                {t: DOC_TYPE_LABELS[t] for t in DocType}, label="Document type"
            ).classes("w-full")

            async def submit() -> None:
                if not picked or not doc_type.value:
                    ui.notify("Please fill in all fields", type="warning")
                    return
                try:
                    upload = DocumentUpload(
                        title=title.value or "",
                        description=description.value or "",
                        doc_type=doc_type.value,
                    )
                    await documents.upload_document(
                        picked["name"], picked["content"], upload, picked["type"]
                    )
                except ValueError:
                    ui.notify("Please fill in all fields", type="warning")
                    return
                except LexAIClientError as e:
                    ui.notify(str(e), type="negative")
                    return
                dialog.close()
                await load_page(state["page"])

            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Upload", on_click=submit)
        dialog.open()

    def on_search(e: events.ValueChangeEventArguments) -> None:
        state["search"] = e.value or ""
        document_list.refresh()

    def on_filter(e: events.ValueChangeEventArguments) -> None:
        state["doc_type"] = e.value
        document_list.refresh()

    def logout() -> None:
        auth.logout()
        logger.info("Logged out from dashboard")
        show_login()

    login_container = ui.column().classes("w-full p-8")
    dashboard_container = ui.column().classes("w-full max-w-5xl mx-auto p-8 gap-4")

    with login_container:
        login_card()

    with dashboard_container:
        with ui.row().classes("w-full items-center justify-between"):
            ui.label("Document Dashboard").classes("text-2xl font-semibold")
            with ui.row().classes("gap-2"):
                ui.button("Chat", icon="chat", on_click=lambda: ui.navigate.to("/")).props("flat")
                ui.button("Upload", icon="upload", on_click=open_upload_dialog)
                ui.button(icon="logout", on_click=logout).props("flat round")
        with ui.row().classes("w-full gap-4"):
            ui.input("Search documents", on_change=on_search).classes("flex-grow")
            ui.select(
                {None: "All", **{t: DOC_TYPE_LABELS[t] for t in DocType}},
                value=None,
                label="Type",
                on_change=on_filter,
            ).classes("w-48")
        document_list()

    def show_login() -> None:
        dashboard_container.set_visibility(False)
        login_container.set_visibility(True)
        login_card.refresh()

    async def show_dashboard() -> None:
        login_container.set_visibility(False)
        dashboard_container.set_visibility(True)
        await load_page(state["page"])

    if tokens.is_authenticated:
        login_container.set_visibility(False)

        async def initial_load() -> None:
            await load_page(state["page"])

        ui.timer(0, initial_load, once=True)
    else:
        show_login()
