# crosswind

A small framework for writing programs in the style of microcontroller
firmware. An `Application` owns a board (`Hardware`), a set of drivers and a
set of services. `setup()` initialises the board and the application once;
each call to `loop()` runs the board's loop, every driver's loop, every
service's loop (services come after the services they name in `depends_on()`)
and finally the application's own loop.

## Modules

- `crosswind.framework`: `Application`, `Hardware`, `Driver`, `Service`, and
  the module-level `setup(factory)` and `loop()`. Drivers and services are
  registered with `register_driver` / `register_service` and looked up by
  name or by class with `driver(...)` / `service(...)`.
- `crosswind.event_broker`: `EventBroker`, a service that queues published
  events (at most 16 at a time, `EventBrokerQueueFullError` beyond that) and
  hands each one to the topic's subscribers on its next `loop()`.
- `crosswind.logger`: `Logger`, a service that writes `fmt % args` to a text
  stream when the message's `LogLevel` is at least as severe as the
  configured one. `suspend()` and `resume()` switch output off and on.
- `crosswind.queues`: `CircularQueue` and `FixedQueue`, bounded FIFO queues
  that raise `...FullError` / `...EmptyError` (both subclasses of
  `IndexError`).
- `crosswind.stopwatch`: `StopWatch`, which counts milliseconds or
  microseconds on a 32-bit counter and survives one wrap of it. A custom
  `clock` callable can be passed in.
- `crosswind.mac_address.MACAddress`, `crosswind.device_uuid.UUID` and
  `crosswind.version.Version`: small value types that parse and print
  `"xx:xx:xx:xx:xx:xx"`, the 8-4-4-4-12 hex form, and `"major.minor.build"`.
- `crosswind.string_utils.join_to_string(values, delim=",")`.
- `crosswind.analog_write`: `AnalogWriter`, which hands out sixteen PWM
  channels to pins on first use and writes duty cycles through a
  `LedcBackend` you supply.
- `crosswind.pwm_fan`: `PWMFan`, a fan driven by a 0..255 duty value through
  any object with a `write(pin, value)` method, such as an `AnalogWriter`.
- `crosswind.nv_memory`: `NVMemory`, `NVMNamespace` and `NVMWriter`: typed
  key/value storage in named namespaces that are read-only unless writing is
  enabled.

## Installing

```
pip install .
```

## A minimal application

```python
from crosswind.framework import Application, Hardware, setup, loop
from crosswind.event_broker import EventBroker


class Board(Hardware):
    def init(self):
        pass

    def loop(self):
        pass


class App(Application):
    def __init__(self):
        super().__init__()
        self._board = Board()
        self.broker = self.register_service(EventBroker)

    def hardware(self):
        return self._board

    def init(self):
        topic = self.broker.register_topic("greetings")
        self.broker.subscribe(topic, print)
        self.broker.publish(topic, "hello")

    def loop(self):
        pass


setup(App)
loop()  # the broker dispatches the event: prints "hello"
```

`setup()` calls the board's `init()` and the application's `init()`; it does
not call the `init()` of registered drivers and services, so do that from the
application's `init()` where a service needs it.

## Value types

```python
from crosswind.version import Version
from crosswind.mac_address import MACAddress

Version.parse("1.2.3") < Version(1, 10, 0)   # True
str(Version(2, 0, 7))                        # "2.0.7"
str(MACAddress(0x02, 0, 0, 0, 0, 0x01))      # "02:00:00:00:00:01"
```

## PWM output

```python
from crosswind.analog_write import AnalogWriter, LedcBackend
from crosswind.pwm_fan import PWMFan


class Recorder(LedcBackend):
    def __init__(self):
        self.duties = {}

    def setup(self, channel, frequency, resolution):
        pass

    def attach_pin(self, pin, channel):
        pass

    def write(self, channel, duty):
        self.duties[channel] = duty


backend = Recorder()
writer = AnalogWriter(backend)
writer.write(5, 128)        # pin 5 gets channel 0; duty 4096 at 13-bit resolution

fan = PWMFan(6, 3000, writer)
fan.set_speed(100.0)        # full duty on pin 6
fan.pwm                     # 255
```

## Non-volatile storage

```python
from crosswind.nv_memory import NVMemory, IntKind

memory = NVMemory()
memory.init()
with memory.open("settings", writable=True) as ns:
    ns.set_int("count", 3, IntKind.U8)
    ns.set_str("label", "kitchen")
    ns.get_int("count", IntKind.U8)   # 3
```

## What the package does not do

- It does not touch real hardware. PWM goes only to the `LedcBackend` you
  provide; there are no GPIO, I2C, SPI or serial back ends, and no concrete
  drivers.
- `NVMemory` keeps its namespaces in the process's memory. Nothing is written
  to disk, so values are gone when the program exits.
- There is no command-line program; the package is used as a library.

## Running the tests

```
pip install .[test]
pytest
```