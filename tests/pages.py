"""Synthetic holdings pages shaped like the live investing page: an unlabelled
header row followed by link rows whose cells sit a few wrappers deep."""

UP_ARROW = '<svg width="8" height="8"><path d="M4 2.5 L7 6.5 L1 6.5 Z"></path></svg>'
DOWN_ARROW = '<svg width="8" height="8"><path d="M4 9.5 L1 5.5 L7 5.5 Z"></path></svg>'

HEADER = (
    "<header>"
    "<div>Name</div><div>Price</div><div>Shares</div>"
    "<div><span>Total return</span></div><div><span>Equity</span></div>"
    "</header>"
)


def holding_row(symbol: str, total_return_html: str, equity_html: str) -> str:
    return (
        f'<a href="/stocks/{symbol}">'
        '<div class="wrap"><div class="inner">'
        f"<div>{symbol}</div><div>$10.00</div><div>3</div>"
        f"<div>{total_return_html}</div><div>{equity_html}</div>"
        "</div></div>"
        "</a>"
    )


def holdings_page(rows: list[str], header: str = HEADER) -> str:
    return (
        "<html><body><main><section>"
        f"{header}"
        f'<div class="rows">{"".join(rows)}</div>'
        "</section></main></body></html>"
    )


def scenario_a_page() -> str:
    return holdings_page([
        holding_row("AAA", f"{UP_ARROW}<span>$120.50</span>", "<span>$500.00</span>"),
        holding_row("BBB", "<span>($30.25)</span>", "<span>$300.00</span>"),
    ])
