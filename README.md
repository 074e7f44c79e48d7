# concurrentengine

concurrentengine is a small thread pool. Its work queue is a pluggable scheduler. The package provides three schedulers:

- `FIFOScheduler` (`concurrentengine.fifo`) hands out tasks in the order they were added.
- `PriorityScheduler` (`concurrentengine.priority`) keeps one queue for each `TaskPriority`. It always serves `HIGH` first, then `MEDIUM`, then `LOW`.
- `DAGScheduler` (`concurrentengine.dag`) holds each `TaskNode` until every node it depends on has finished.

All three implement the `Scheduler` interface in `concurrentengine.base`. That interface has these members:

- `add_task`
- `get_task`
- `report_status`
- `shutdown`
- `set_reject_policy`
- `set_max_queue_size`
- `len()`

## Bounded queues and reject policies

You can bound the FIFO and priority schedulers with `set_max_queue_size(n)`. A size of `0`, the default, means no bound. A `RejectPolicy` decides what happens to a task that arrives while the queue is full:

- `BLOCK` (default): `add_task` waits until a worker takes a task.
- `DISCARD`: the scheduler drops the task, and `add_task` returns `False`.
- `THROW`: `add_task` raises `TaskRejectedError`.

`DAGScheduler` has no queue bound. It accepts `set_reject_policy` and `set_max_queue_size`, but only prints that they do not apply. Its `add_task` does not accept plain tasks, so use `add_node(node, dependencies)` instead.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Usage

### Futures from submitted functions

```python
from concurrentengine.fifo import FIFOScheduler
from concurrentengine.pool import ThreadPool

with ThreadPool(FIFOScheduler()) as pool:
    pool.start(2)
    answer = pool.submit(lambda: 42)
    total = pool.submit(lambda x, y: x + y, 3, 7)
    print(answer.result(), total.result())   # 42 10
```

`submit(func, *args, priority=..., name=..., **kwargs)` returns a `concurrent.futures.Future`. If `func` raises an exception, the future holds that exception.

`submit` raises `SubmitError` in these cases:

- the pool is not running;
- the pool has no scheduler;
- the scheduler is a `DAGScheduler`.

If the scheduler discards the task under `DISCARD`, the returned future holds a `SubmitError`. Under `THROW`, `submit` lets `TaskRejectedError` propagate.

`submit_task(task, priority)` queues a plain callable. It returns `False` when the pool refuses the task. Leaving the `with` block calls `stop()`.

### Priorities

```python
from concurrentengine.base import RejectPolicy
from concurrentengine.pool import ThreadPool
from concurrentengine.priority import PriorityScheduler, TaskPriority

scheduler = PriorityScheduler()
scheduler.set_reject_policy(RejectPolicy.BLOCK)
scheduler.set_max_queue_size(5)

pool = ThreadPool(scheduler)
pool.start(2)
pool.submit(print, "urgent", priority=TaskPriority.HIGH)
pool.submit(print, "later", priority=TaskPriority.LOW)
pool.stop()
```

`PriorityScheduler.queue_sizes()` returns the number of queued tasks for each priority.

### Dependencies

```python
from concurrentengine.dag import DAGScheduler, TaskNode
from concurrentengine.pool import ThreadPool

pool = ThreadPool(DAGScheduler())
pool.start(4)

b = TaskNode(lambda: print("B"))
c = TaskNode(lambda: print("C"))
a = TaskNode(lambda: print("A, after B and C"))

pool.submit_node(b, [])
pool.submit_node(c, [])
pool.submit_node(a, [b, c])
```

Some notes on dependency nodes:

- `submit_node` returns `False` if the pool is not running, if the scheduler is not a `DAGScheduler`, or if the node has no task.
- A node links to its dependents through weak references, so keep your own references to the nodes until they have run.
- If a node's task raises an exception, the scheduler logs the exception. The node still counts as finished.

`submit_dag(func, dependencies, name)` does the same for a plain function and returns a future for its result. It keeps the node alive until the node has run. It raises `SubmitError` if the node cannot be submitted.

### Pool state

A `ThreadPool` has these members for inspecting its state:

- `running`
- `thread_count` (live workers)
- `free_thread_count`
- `task_count` (accepted tasks not yet started)
- `queue_size`
- `report_status()`, which prints a summary
- `thread_meta(thread_id)`, which returns the `ThreadMeta` of a worker

A `ThreadMeta` (`concurrentengine.thread_meta`) records a worker's `ThreadState` (`IDLE`, `RUNNING`, `TERMINATING` or `TERMINATED`) and when it last became idle. `should_recycle(timeout)` tells whether the worker has been idle for longer than `timeout` seconds.

`concurrentengine.thread.WorkerThread` is a standalone worker thread with an id. It works in one of two ways:

- Given a function, `start()` runs that function once with the thread id.
- Given no function, the thread serves callables passed to `assign()` until you call `stop()`.

### Logging

Every component reports what it is doing through a shared `ThreadLogger`. `get_logger()` returns that logger. It prints timestamped, colour-coded lines to standard output.

```python
from concurrentengine.logger import LogLevel, get_logger

logger = get_logger()
logger.enable_file_logging("thread.log")   # also append records to a file
logger.set_callback(my_handler)            # also pass each formatted line to a callable
logger.log("hello", LogLevel.WARN, thread_id=3)
logger.disable_file_logging()
```

`log_info`, `log_warn`, `log_error` and `log_debug` write a record at the matching level.

## Demonstrations

The package installs the `concurrentengine-demo` command. It runs one of these demonstrations:

| Argument | What it runs |
|---|---|
| `hello` (default) | A slow greeting on a four-worker pool. |
| `future` | Two results returned through futures: `42` and `10`. |
| `reject-block`, `reject-discard`, `reject-throw` | Ten tasks submitted to a one-worker pool whose queue holds two, under the named policy. |

```
concurrentengine-demo future
concurrentengine-demo reject-discard
concurrentengine-demo --help
```

The same demonstrations are available as `run_hello()`, `run_future_demo()` and `run_reject_test(policy, task_count, task_delay, settle_time)` in `concurrentengine.demo`.

## Limitations

- The pool always runs the number of workers given to `start()`. `PoolMode` is recorded on the pool, but the pool never adds workers on demand and never retires idle ones.
- `stop()` lets each worker finish its current task. Tasks still in the queue at that point may never run.
- A scheduler that has been shut down stays shut down. Give each new pool a fresh scheduler.
- `start()` raises `ValueError` if the pool has no scheduler.