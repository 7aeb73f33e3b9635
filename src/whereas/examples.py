"""
Example Resolutions for demos and tests.

The source constants are complete programs. build_example_resolution()
builds the INVENTORY program directly from AST nodes, without parsing.
"""
from whereas.expressions import (
    Identifier,
    InfixExpr,
    InfixOperator,
    IntegerLiteral,
)
from whereas.model import AssumeStmt, DeclStmt, PublishStmt, Resolution


HELLO_WORLD = 'title whereas resolved publish "Hello, World!"'

GREETING = """\
A Resolution Concerning Salutations

WHEREAS the Customary Greeting (hereinafter Greeting) is "Hello, World!":
now, therefore, be it

RESOLVED, that this assembly publish the Greeting.
"""

INVENTORY = """\
A Resolution on the Counting of Widgets

WHEREAS the Widgets held in Stock (hereinafter Stock) number ninety-nine (99);

WHEREAS each Shipment (hereinafter Shipment) carries twelve (12) widgets;

RESOLVED, that Stock assume Stock less Shipment;

RESOLVED, that this assembly publish Stock.
"""

ARITHMETIC = """\
A Resolution on Sundry Sums

WHEREAS the Base Amount (hereinafter Base) is seven (7);

RESOLVED, that this assembly publish the sum of Base and three (3);
RESOLVED, that this assembly publish the product of Base and Base;
RESOLVED, that this assembly publish Base squared;
RESOLVED, that this assembly publish twice Base cubed;
RESOLVED, that this assembly publish the quotient of Base and two (2);
RESOLVED, that this assembly publish the remainder of Base and two (2);
RESOLVED, that this assembly publish Base less ten (10).
"""

CONDITIONAL = """\
A Resolution on the Adequacy of Supplies

WHEREAS the Supplies on Hand (hereinafter Supplies) are fifty (50);

WHEREAS the Minimum Reserve (hereinafter Reserve) is twenty (20);

RESOLVED, that if Supplies exceeds Reserve, this assembly publish "Supplies are adequate";

RESOLVED, that if Supplies equals Reserve, this assembly publish "Supplies are at the minimum";

RESOLVED, that if Supplies exceeds twice Reserve, Supplies assume Supplies less Reserve;

RESOLVED, that this assembly publish Supplies.
"""

ALL_EXAMPLES = {
    "hello_world": HELLO_WORLD,
    "greeting": GREETING,
    "inventory": INVENTORY,
    "arithmetic": ARITHMETIC,
    "conditional": CONDITIONAL,
}


def build_example_resolution(stock: int = 99, shipment: int = 12) -> Resolution:
    stock_name = Identifier("Stock")
    shipment_name = Identifier("Shipment")

    whereas_stmts = (
        DeclStmt(name=stock_name, value=IntegerLiteral(stock)),
        DeclStmt(name=shipment_name, value=IntegerLiteral(shipment)),
    )
    resolved_stmts = (
        AssumeStmt(
            name=stock_name,
            value=InfixExpr(
                operator=InfixOperator.SUBTRACT,
                left=stock_name,
                right=shipment_name,
            ),
        ),
        PublishStmt(value=stock_name),
    )
    return Resolution(whereas_stmts=whereas_stmts, resolved_stmts=resolved_stmts)


__all__ = [
    "HELLO_WORLD",
    "GREETING",
    "INVENTORY",
    "ARITHMETIC",
    "CONDITIONAL",
    "ALL_EXAMPLES",
    "build_example_resolution",
]
