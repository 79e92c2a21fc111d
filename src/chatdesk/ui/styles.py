"""Application stylesheet.

Layout: customer sidebar on the left, conversation on the right with
header, scrolling bubbles, typing indicator and input bar stacked.
"""

APP_CSS = """
Screen {
    layout: horizontal;
    background: $background;
}

/* Sidebar - Operator Profile + Customer List */
#sidebar {
    width: 34;
    height: 100%;
    background: $surface;
    border-right: solid $border;
}

#operator-profile {
    height: 3;
    padding: 1 1 0 1;
    text-style: bold;
    color: $foreground;
}

#add-customer-btn {
    width: 1fr;
    margin: 0 1 1 1;
}

#customer-list {
    height: 1fr;
    scrollbar-gutter: stable;
}

.customer-row {
    height: 3;
    padding: 0 1;
    background: $surface;

    &:hover {
        background: $surface-lighten-1;
    }

    &.-active {
        background: $primary 35%;
    }

    & .customer-avatar {
        width: 4;
        height: 1;
        margin: 1 1 0 0;
    }

    & .customer-text {
        width: 1fr;
        height: 3;
    }

    & .customer-title {
        height: 1;
        margin-top: 0;
    }

    & .customer-preview {
        height: 1;
        color: $text-muted;
    }
}

/* Chat Pane */
#chat-pane {
    width: 1fr;
    height: 100%;
    background: $panel;
}

#chat-header {
    height: 3;
    padding: 1 2 0 2;
    text-style: bold;
    border-bottom: solid $border;
}

#chat-history {
    height: 1fr;
    padding: 1 2;
    scrollbar-gutter: stable;
}

#empty-state {
    width: 100%;
    height: 100%;
    content-align: center middle;
    color: $text-muted;
}

/* Message Bubbles */
.bubble-row {
    width: 100%;
    height: auto;
    margin: 0 0 1 0;
}

.bubble-row.-outgoing {
    align-horizontal: right;
}

.bubble-avatar {
    width: 4;
    height: 1;
    margin: 0 1;
}

.bubble {
    width: auto;
    max-width: 70%;
    height: auto;
    padding: 0 1;
    color: #111111;
}

.-outgoing .bubble {
    background: #95ec69;
}

.-incoming .bubble {
    background: #f2f2f2;
}

.bubble-meta {
    color: #555555;
    text-style: dim;
}

/* Typing Indicator */
#typing-indicator {
    height: 1;
    padding: 0 2;
    color: $text-muted;
}

/* Chat Input Bar - Text Entry + Send */
ChatInputBar {
    height: 7;
    border-top: solid $border;
    background: $panel;
}

#chat-input {
    width: 1fr;
    height: 100%;
    border: none;
    padding: 0 1;
    background: transparent;

    &:focus {
        background: transparent;
    }
}

#send-btn {
    width: 12;
    height: 3;
    margin: 2 1 0 1;
    background: $primary;
    color: $background;
    text-style: bold;
    border: none;

    &:hover {
        background: $primary-lighten-1;
    }
}

/* Debug/Log Panel */
#debug-panel {
    height: 10;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

Toast {
    background: $surface;
    border: tall $border;
    padding: 0 1;
}
"""
