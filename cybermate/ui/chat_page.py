"""NiceGUI chat interface driven by ChatSession callbacks."""

import os

from nicegui import ui

from cybermate.chat.session import ChatSession, TurnOutcome
from cybermate.models.schemas import Message, Mode, Role, TurnError

CHAT_ENDPOINT_URL = os.getenv("CHAT_ENDPOINT_URL", "http://localhost:8000/chat-ai")

MODE_LABELS: dict[Mode, str] = {
    Mode.ASSESSMENT: "Security Assessment",
    Mode.INCIDENT: "Incident Response",
    Mode.AWARENESS: "Awareness & News",
    Mode.HELPLINE: "Helpline Support",
}

MODE_BLURBS: dict[Mode, str] = {
    Mode.ASSESSMENT: "Let me help assess your cybersecurity needs and recommend solutions.",
    Mode.INCIDENT: "Get immediate guidance for cyber attacks and security incidents.",
    Mode.AWARENESS: "Stay informed about the latest threats and security best practices.",
    Mode.HELPLINE: "Access Indian cybercrime helplines and reporting resources.",
}

QUICK_ACTIONS: dict[Mode, list[str]] = {
    Mode.ASSESSMENT: [
        "Help me assess our company's cybersecurity needs",
        "Recommend security tools for a small business",
        "What's the best budget allocation for security?",
    ],
    Mode.INCIDENT: [
        "We've been hit by ransomware, what do I do?",
        "Suspicious email clicked, how to contain?",
        "Data breach detected, need immediate help",
    ],
    Mode.AWARENESS: [
        "What are the latest cybersecurity threats?",
        "Teach me about phishing prevention",
        "Best practices for password security",
    ],
    Mode.HELPLINE: [
        "I need to report a cybercrime in India",
        "How do I contact CERT-In?",
        "What information do I need to file a complaint?",
    ],
}

CUSTOM_CSS = """
<style>
    body { background: #0f172a; min-height: 100vh; }
    .app-container { background: #111827; border-radius: 12px; overflow: hidden; }
    .header { background: linear-gradient(135deg, #0891b2 0%, #7c3aed 100%); }
    .message-user { background: rgba(8, 145, 178, 0.15); color: #e5e7eb; border-radius: 12px; }
    .message-assistant { background: #1f2937; color: #e5e7eb; border-radius: 12px; }
</style>
"""


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    session = ChatSession(CHAT_ENDPOINT_URL)
    ui.context.client.on_disconnect(session.aclose)

    messages_container: ui.column
    input_field: ui.textarea
    send_btn: ui.button

    def render_message(msg: Message) -> ui.markdown:
        is_user = msg.role is Role.USER
        bubble = "message-user ml-12" if is_user else "message-assistant mr-12"
        with ui.element("div").classes(f"w-full px-4 py-3 {bubble}"):
            return ui.markdown(msg.content).classes("text-sm leading-relaxed")

    def render_empty_state() -> None:
        with ui.column().classes("w-full items-center gap-4 py-12"):
            ui.icon("shield").classes("text-6xl text-cyan-400")
            ui.label(MODE_LABELS[session.mode]).classes("text-xl font-bold text-white")
            ui.label(MODE_BLURBS[session.mode]).classes("text-sm text-gray-400")
            ui.label("Quick Actions:").classes("text-xs text-gray-500")
            with ui.row().classes("gap-2 justify-center"):
                for action in QUICK_ACTIONS[session.mode]:
                    ui.button(action, on_click=lambda a=action: send_message(a)).props(
                        "outline size=sm"
                    )

    def refresh_messages() -> None:
        messages_container.clear()
        with messages_container:
            if not session.messages:
                render_empty_state()
            else:
                for msg in session.messages:
                    render_message(msg)

    def change_mode(value: str) -> None:
        session.set_mode(value)
        refresh_messages()

    async def send_message(text: str | None = None) -> None:
        text = (text or input_field.value or "").strip()
        if not text or session.is_busy:
            return

        input_field.value = ""
        send_btn.disable()
        if not session.messages:
            messages_container.clear()
        with messages_container:
            render_message(Message(role=Role.USER, content=text))
            with ui.row().classes("items-center gap-2 text-gray-400") as thinking_row:
                ui.spinner(size="sm")
                ui.label("CyberMate is thinking...").classes("text-sm")

        assistant_view: ui.markdown | None = None

        def finish() -> None:
            if assistant_view is None:
                thinking_row.delete()
            send_btn.enable()

        def on_delta(content: str) -> None:
            nonlocal assistant_view
            if assistant_view is None:
                thinking_row.delete()
                with messages_container:
                    assistant_view = render_message(
                        Message(role=Role.ASSISTANT, content=content)
                    )
            else:
                assistant_view.set_content(content)

        def on_error(error: TurnError) -> None:
            ui.notify(error.message, type="negative")
            finish()

        outcome = await session.send(text, on_delta=on_delta, on_done=finish, on_error=on_error)
        if outcome is TurnOutcome.CANCELLED:
            # The container was already redrawn by the mode switch.
            send_btn.enable()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center gap-3"):
            ui.icon("shield").classes("text-white text-3xl")
            with ui.column().classes("gap-0"):
                ui.label("CyberMate").classes("text-lg font-semibold text-white")
                ui.label("AI Cybersecurity Consultant").classes("text-xs text-white/80")

        # Mode selector
        ui.toggle(
            {mode.value: label for mode, label in MODE_LABELS.items()},
            value=session.mode.value,
            on_change=lambda e: change_mode(e.value),
        ).classes("px-4 py-2")

        # Messages
        with (
            ui.scroll_area().classes("flex-grow w-full"),
            ui.column().classes("w-full p-5"),
        ):
            messages_container = ui.column().classes("w-full gap-4")
            refresh_messages()

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end border-t border-gray-700"):
            input_field = (
                ui.textarea(placeholder="Describe your security concern...")
                .props("autogrow dense dark rows=1")
                .classes("flex-grow")
                .on("keydown.enter.prevent", lambda: send_message())
            )
            send_btn = ui.button(icon="send", on_click=lambda: send_message()).props(
                "round unelevated"
            )


def main() -> None:
    ui.run(title="CyberMate", port=8080, reload=False)


if __name__ == "__main__":
    main()
