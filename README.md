# pinelet

`pinelet` provides the building blocks of a Pine-style trading script
language: its runtime values and operators, a syntax tree for programs, the
records a script emits on a bar (plots, labels, boxes, log entries), and the
technical-analysis and time functions scripts commonly call.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## What is in the package

| Module | Contents |
| --- | --- |
| `pinelet.values` | Runtime values (`Na` and its single instance `NA`, `Color`, `Bar`, `Series`, `PineObject`, `UserFunction`, `PineType`, `EnumMember`, `Matrix`), call arguments (`NamedArg`, `CallArgs`), conversions (`as_number`, `as_bool`, `as_string`, `as_array`, `as_color`), `describe`, `values_equal`, `binary_op`, `unary_op`, and the `PineError` family of exceptions |
| `pinelet.nodes` | The syntax tree: operator enums, expression nodes, statement nodes, `Program`, and `literal_value` |
| `pinelet.output` | `PineOutput`, which collects `Plot`, `Plotarrow`, `Plotbar`, `Plotcandle`, `Plotchar`, `Plotshape`, `Label`, `PineBox` and `LogEntry` records |
| `pinelet.timefuncs` | `year`, `month`, `dayofmonth`, `dayofweek`, `hour`, `minute`, `second`, and `register_time_functions` |
| `pinelet.ta.moving_averages` | `sma`, `ema`, `rma`, `wma`, `vwma`, `hma`, `swma` |
| `pinelet.ta.statistics` | `stdev`, `variance`, `median`, `dev` |
| `pinelet.ta.oscillators` | `rsi`, `cci`, `mom`, `roc`, `cmo`, `linreg` |
| `pinelet.ta.volatility` | `tr`, `atr`, `bb` |
| `pinelet.ta.comparison` | `change`, `highest`, `lowest`, `highestbars`, `lowestbars`, `rising`, `falling`, `cross`, `crossover`, `crossunder` |

## Values and operators

Numbers are Python floats, strings are `str`, booleans are `bool`, arrays are
`list`, and the missing value is `pinelet.values.NA`. Operators are applied
by symbol, or by the `BinOp` and `UnOp` members of `pinelet.nodes`:

```python
from pinelet.values import binary_op, unary_op, values_equal, NA

binary_op(1.0, "+", 2.0)      # 3.0
binary_op("bar ", "+", 5.0)   # "bar 5"
unary_op("not", 0.0)          # True
values_equal(NA, NA)          # True
binary_op(1.0, "/", 0.0)      # raises DivisionByZeroError
```

`CallArgs.bind(function_name, names, defaults)` matches positional and
`NamedArg` arguments to parameter names and fills in defaults, raising
`PineTypeError` for unknown, repeated or missing arguments.

## Technical-analysis functions

Every `ta` function takes, as its first argument, a context object that
supplies series history. It needs:

- `get_series_values(source, length)`: for a `Series`, its current value
  followed by up to `length - 1` earlier values, newest first; for a plain
  number, a one-element list;
- `historical_provider`: an object whose `get_historical(series_id, offset)`
  returns the value `offset` bars back, or `None` (may itself be `None`);
- `get_variable(name)`: the value bound to a name, or `None`; `vwma` reads
  `volume`, and `tr` and `atr` read `high`, `low` and `close`.

A minimal context:

```python
from pinelet.values import Series, as_number
from pinelet.ta.moving_averages import sma
from pinelet.ta.comparison import change


class Context:
    def __init__(self, history, variables=None):
        self.history = history          # series id -> values, newest first
        self.variables = variables or {}
        self.historical_provider = self

    def get_historical(self, series_id, offset):
        values = self.history.get(series_id, [])
        return values[offset] if offset < len(values) else None

    def get_variable(self, name):
        return self.variables.get(name)

    def get_series_values(self, source, length):
        if isinstance(source, Series):
            values = [source.current]
            for offset in range(1, length):
                past = self.get_historical(source.id, offset)
                if past is None:
                    break
                values.append(past)
            return values
        return [as_number(source)]


ctx = Context({"close": [12.0, 11.0, 10.0]})
close = Series("close", 12.0)
sma(ctx, close, 3)       # 11.0
change(ctx, close, 1)    # 1.0
```

Results on early bars use whatever history is available, so they may be
computed from fewer values than the requested length. A length of zero or
less raises `PineTypeError` where the function requires a positive length.

## Time functions

The functions in `pinelet.timefuncs` take a UNIX time in milliseconds and
return a float. They use simple approximations in UTC, with 365-day years
and 30-day months:

```python
from pinelet import timefuncs

timefuncs.hour(5 * 3_600_000)   # 5.0
timefuncs.dayofweek(0)          # 5.0 (Thursday; Sunday is 1)
```

`register_time_functions()` returns `(name, callable)` pairs whose callables
take a context and a `CallArgs`.

## Output

`PineOutput` gathers what a script emits. `add_log` appends a `LogEntry`;
`add_label` and `add_box` return integer ids counted from zero, usable with
`get_label`/`get_box` and `delete_label`/`delete_box`. `clear()` drops
everything and restarts the ids; `copy()` returns an independent copy.

## What the package does not do

The package has no evaluator: nothing in it executes a `Program` or its
statements, evaluates expression nodes, resolves variables, or performs
`Import` statements. It has no lexer or parser, so programs must be built
from `pinelet.nodes` classes directly, and it offers no command-line tool.
The `ta` functions are called one by one with a context you provide; there
is no ready-made `ta` namespace object.

## Errors

Failures raise subclasses of `pinelet.values.PineError`:
`UndefinedVariableError`, `PineTypeError`, `DivisionByZeroError`,
`IndexOutOfBoundsError`, `InvalidForLoopError`, `BreakOutsideLoopError`,
`ContinueOutsideLoopError`, `LibraryError` and `ConstReassignmentError`.