"""NiceGUI chat page rendering a streaming ChatSession."""

from nicegui import events, ui

from lexai.chat.gate import InputGate
from lexai.chat.session import ChatSession
from lexai.models.schemas import ConversationEntry, EntryRole

CUSTOM_CSS = """
<style>
    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #6366f1 0%, #9333ea 100%); }

    .message-user {
        background: linear-gradient(135deg, #10b981 0%, #0d9488 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-assistant {
        background: white;
        color: #1f2937;
        border: 1px solid #e5e7eb;
        border-radius: 18px 18px 18px 4px;
    }

    .message-text { white-space: pre-wrap; }

    .stream-cursor {
        display: inline-block;
        width: 8px; height: 16px;
        margin-left: 4px;
        background: #818cf8;
        border-radius: 2px;
        animation: pulse 1s infinite;
    }

    @keyframes pulse { 50% { opacity: 0.3; } }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button
    # Labels of the streaming assistant entry, keyed by entry id
    live_labels: dict[int, tuple[ui.label, ui.element]] = {}

    def render_entry(entry: ConversationEntry) -> None:
        is_user = entry.role is EntryRole.USER
        align = "justify-end" if is_user else "justify-start"
        bubble = "message-user" if is_user else "message-assistant"
        icon = "person" if is_user else "smart_toy"

        with ui.row().classes(f"w-full {align} gap-3 items-start"):
            if not is_user:
                ui.icon(icon).classes("text-indigo-500 text-2xl")
            with ui.column().classes("max-w-[70%] gap-1"):
                with ui.element("div").classes(f"px-4 py-3 {bubble}"):
                    with ui.row().classes("items-end gap-0 no-wrap"):
                        text = ui.label(entry.content).classes(
                            "text-sm leading-relaxed message-text"
                        )
                        cursor = ui.element("span").classes("stream-cursor")
                        cursor.set_visibility(entry.is_streaming)
                ui.label(entry.display_time).classes("text-[10px] text-gray-400")
            if is_user:
                ui.icon(icon).classes("text-emerald-500 text-2xl")

        if entry.is_streaming:
            live_labels[entry.id] = (text, cursor)

    def refresh_messages() -> None:
        live_labels.clear()
        messages_container.clear()
        with messages_container:
            for entry in session.messages:
                render_entry(entry)

    def sync_controls() -> None:
        if gate.allowed:
            send_btn.enable()
        else:
            send_btn.disable()
        input_field.set_enabled(not session.in_flight)

    def on_change(entry: ConversationEntry) -> None:
        if entry.is_terminal:
            live_labels.pop(entry.id, None)
            refresh_messages()
            sync_controls()
            return
        if entry.id not in live_labels:
            # New exchange: draw the user entry and the placeholder
            input_field.value = session.draft_text
            refresh_messages()
            sync_controls()
            return
        live_labels[entry.id][0].set_text(entry.content)

    session = ChatSession(on_change=on_change)
    gate = InputGate(session)

    async def send_message() -> None:
        gate.draft = input_field.value
        await gate.request_submit()

    def new_chat() -> None:
        session.reset()
        refresh_messages()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("gavel").classes("text-white text-3xl")
                ui.label("LexAI Assistant").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-2"):
                ui.button(icon="folder", on_click=lambda: ui.navigate.to("/dashboard")).props(
                    "flat round color=white"
                )
                ui.button(icon="add", on_click=new_chat).props("flat round color=white")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full bg-gray-50"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            input_field = (
                ui.textarea(placeholder="Ask me anything about legal matters...")
                .props("autogrow outlined dense rows=2")
                .classes("flex-grow")
                .on("keydown.enter.prevent", send_message)
            )
            send_btn = ui.button(icon="send", on_click=send_message).props("round unelevated")

    def on_draft_change(e: events.ValueChangeEventArguments) -> None:
        gate.draft = e.value
        sync_controls()

    input_field.on_value_change(on_draft_change)
    refresh_messages()
    sync_controls()
