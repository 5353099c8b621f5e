import argparse
import sys
import time
from collections import deque

import matplotlib.pyplot as plt

# Memory Setup
MEMORY_SIZE = 60 # total slots in simulated memory
INPUT_SPACE_PER_PROCESS = 3 # variable slots reserved after each program
MAX_PROGRAMS = 3 # programs loaded by the command line front end
DEFAULT_PROGRAMS = [f"Program_{i}.txt" for i in range(1, MAX_PROGRAMS + 1)]

# Slot categories
INSTRUCTION = "Instruction"
FREE = "Free"

# Resources guarded by a binary semaphore each
RESOURCES = ("file", "userInput", "userOutput")

# Process states
PENDING = 'PENDING'
READY = 'READY'
RUNNING = 'RUNNING'
BLOCKED = 'BLOCKED'
TERMINATED = 'TERMINATED'

# Instruction opcodes
SEM_WAIT = 'semWait' # acquire a resource
SEM_SIGNAL = 'semSignal' # release a resource
ASSIGN = 'assign' # bind a variable
PRINT = 'print' # print a variable
PRINT_FROM_TO = 'printFromTo' # print an integer range
WRITE_FILE = 'writeFile' # write a variable to a file
READ_FILE = 'readFile' # read a file into a variable
UNKNOWN = 'unknown' # anything else, executes as a no-op

# Sources for an assign value
SOURCE_INPUT = 'input'
SOURCE_FILE = 'file'
SOURCE_LITERAL = 'literal'


class SimulationError(Exception):
    """Base class for simulator errors."""


class ConfigurationError(SimulationError):
    """Invalid quantum, release time or memory size. Raised before scheduling."""


class LoadError(SimulationError):
    """A program does not fit in the remaining memory."""


class CapacityExceeded(SimulationError):
    """A process tried to bind more variables than it has reserved slots."""


# Purpose: Decodes one line of program text into an (opcode, args) tuple
def decode(text):
    tokens = text.split()
    if not tokens:
        return (UNKNOWN, ())
    op = tokens[0]

    if op in (SEM_WAIT, SEM_SIGNAL):
        if len(tokens) >= 2 and tokens[1] in RESOURCES:
            return (op, (tokens[1],))
        return (UNKNOWN, tuple(tokens))

    if op == ASSIGN:
        if len(tokens) < 3:
            return (UNKNOWN, tuple(tokens))
        name = tokens[1]
        # value is the rest of the line after the variable name
        value = text.strip().split(None, 2)[2]
        if value == 'input':
            return (ASSIGN, (name, SOURCE_INPUT, None))
        if tokens[2] == READ_FILE and len(tokens) >= 4:
            return (ASSIGN, (name, SOURCE_FILE, tokens[3]))
        return (ASSIGN, (name, SOURCE_LITERAL, value))

    if op == PRINT and len(tokens) >= 2:
        return (PRINT, (tokens[1],))

    if op in (PRINT_FROM_TO, WRITE_FILE, READ_FILE) and len(tokens) >= 3:
        return (op, (tokens[1], tokens[2]))

    return (UNKNOWN, tuple(tokens))


# Represents one addressable slot of simulated memory
class MemorySlot:
    def __init__(self, name="", value=""):
        self.name = name # "Instruction", "Free" or a variable name
        self.value = value # instruction text or variable value
        self.instruction = None # decoded form, Instruction slots only
        if name == INSTRUCTION:
            self.instruction = decode(value)

    def __repr__(self):
        return f"MemorySlot({self.name!r}, {self.value!r})"


# Represents the simulated main memory: a fixed array of named slots
class Memory:
    def __init__(self, size=MEMORY_SIZE):
        if size <= 0:
            raise ConfigurationError(f"Memory size must be positive, got {size}")
        self.size = size
        self.slots = [MemorySlot() for _ in range(size)]

    def _check(self, address):
        if address < 0 or address >= self.size:
            raise IndexError(f"Memory address {address} out of bounds")

    # Purpose: Returns the slot at an address
    def read(self, address):
        self._check(address)
        return self.slots[address]

    # Purpose: Overwrites a slot in place
    def write(self, address, name, value):
        self._check(address)
        self.slots[address] = MemorySlot(name, value)

    # Purpose: Writes a program followed by its reserved variable slots, returns the upper bound
    def load(self, start, lines):
        end = start + len(lines) + INPUT_SPACE_PER_PROCESS
        if start < 0 or end > self.size:
            raise LoadError(
                f"Program of {len(lines)} instructions needs slots {start}-{end - 1}, "
                f"memory has {self.size}")

        address = start
        for line in lines:
            self.write(address, INSTRUCTION, line)
            address += 1
        for _ in range(INPUT_SPACE_PER_PROCESS):
            self.write(address, FREE, "")
            address += 1
        return address - 1

    # Purpose: Finds the first address in [low, high] holding a slot with the given name
    def find_address(self, name, low=0, high=None):
        if high is None:
            high = self.size - 1
        for address in range(max(0, low), min(high, self.size - 1) + 1):
            if self.slots[address].name == name:
                return address
        return None

    # Purpose: Returns the value of the first slot with the given name, or None
    def find(self, name):
        address = self.find_address(name)
        if address is None:
            return None
        return self.slots[address].value

    def is_instruction(self, address):
        return 0 <= address < self.size and self.slots[address].name == INSTRUCTION


# Represents a Process Control Block (PCB) for process tracking
class PCB:
    def __init__(self, pid, quantum, release_time, lower_bound, upper_bound):
        self.pid = pid
        self.state = PENDING
        self.quantum = quantum # instructions per turn
        self.release_time = release_time # tick at which the process may start
        self.start_time = None # first dispatch tick
        self.end_time = None # termination tick
        self.pc = lower_bound # absolute address of the next instruction
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.blocked_resource = '' # resource waited on while BLOCKED
        self.var = 0 # reserved variable slots already used
        self.burst_executed = 0 # instructions executed so far

    # Purpose: Address of the next free variable slot
    def next_var_address(self):
        return self.upper_bound - (INPUT_SPACE_PER_PROCESS - 1) + self.var

    def __repr__(self):
        return f"PCB(pid={self.pid}, state={self.state}, pc={self.pc})"


# Represents a FIFO queue of process IDs
class ProcessQueue:
    def __init__(self, name):
        self.name = name
        self._pids = deque()

    def enqueue(self, pid):
        self._pids.append(pid)

    def dequeue(self):
        if not self._pids:
            return None
        return self._pids.popleft()

    def front(self):
        return self._pids[0] if self._pids else None

    # Purpose: Removes a PID from anywhere in the queue, keeping the order of the rest
    def remove(self, pid):
        try:
            self._pids.remove(pid)
        except ValueError:
            return False
        return True

    def __len__(self):
        return len(self._pids)

    def __iter__(self):
        return iter(list(self._pids))

    def __contains__(self, pid):
        return pid in self._pids

    def __repr__(self):
        return f"ProcessQueue({self.name}, {list(self._pids)})"


# Represents a binary semaphore guarding one resource, with its blocked queue
class ResourceSemaphore:
    def __init__(self, name):
        self.name = name
        self.count = 1
        self.blocked = ProcessQueue(f"Blocked ({name})")

    @property
    def available(self):
        return self.count > 0


# Represents the simulated clock, advanced only by the kernel loop
class VirtualClock:
    def __init__(self, start=0):
        self.now = start

    def tick(self, n=1):
        self.now += n
        return self.now


# Represents the OS scheduler with its state queues and resource semaphores
class Scheduler:
    def __init__(self, pcb_table):
        self.pcbs = pcb_table
        self.pending = ProcessQueue("Pending")
        self.ready = ProcessQueue("Ready")
        self.running = ProcessQueue("Running")
        self.terminated = ProcessQueue("Terminated")
        self.semaphores = {name: ResourceSemaphore(name) for name in RESOURCES}

    # Purpose: Registers a freshly loaded process as pending start
    def add_pending(self, pcb):
        pcb.state = PENDING
        self.pending.enqueue(pcb.pid)

    # Purpose: Moves every pending process whose release time has come to the ready queue
    def promote(self, current_time):
        promoted = []
        for pid in self.pending:
            pcb = self.pcbs[pid]
            if pcb.release_time <= current_time:
                self.pending.remove(pid)
                pcb.state = READY
                self.ready.enqueue(pid)
                promoted.append(pcb)
        return promoted

    # Purpose: Takes the head of the ready queue onto the CPU
    def select_next(self):
        pid = self.ready.dequeue()
        if pid is None:
            return None
        pcb = self.pcbs[pid]
        pcb.state = RUNNING
        self.running.enqueue(pid)
        return pcb

    # Purpose: Moves the running process to the tail of the ready queue
    def preempt(self, pcb):
        self.running.remove(pcb.pid)
        pcb.state = READY
        self.ready.enqueue(pcb.pid)

    # Purpose: Moves the running process to the terminated queue
    def terminate(self, pcb):
        self.running.remove(pcb.pid)
        pcb.state = TERMINATED
        self.terminated.enqueue(pcb.pid)

    # Purpose: Acquires a resource, or blocks the process on it. Returns True when acquired
    def sem_wait(self, resource, pcb):
        sem = self.semaphores[resource]
        if sem.available:
            sem.count -= 1
            return True

        pcb.state = BLOCKED
        pcb.blocked_resource = resource
        self.running.remove(pcb.pid)
        sem.blocked.enqueue(pcb.pid)
        return False

    # Purpose: Releases a resource and wakes the first process blocked on it
    # The woken process must issue semWait again; it is not handed the resource.
    # The count is capped at 1 instead of incrementing, so unmatched signals add no permits.
    def sem_signal(self, resource):
        sem = self.semaphores[resource]
        sem.count = 1
        pid = sem.blocked.dequeue()
        if pid is None:
            return None
        pcb = self.pcbs[pid]
        pcb.state = READY
        pcb.blocked_resource = ''
        self.ready.enqueue(pid)
        return pcb

    def blocked_count(self):
        return sum(len(sem.blocked) for sem in self.semaphores.values())

    # Purpose: Lists (queue name, queue) pairs in display order
    def queues(self):
        result = [
            ("Running Queue", self.running),
            ("Ready Queue", self.ready),
            ("Pending Queue", self.pending),
        ]
        for name in RESOURCES:
            result.append((f"Blocked Queue ({name})", self.semaphores[name].blocked))
        result.append(("Terminated Queue", self.terminated))
        return result


# Represents the system performance metrics collected during a run
class SimMetrics:
    def __init__(self):
        self.cpu_active_ticks = 0
        self.total_ticks = 0
        self.context_switches = 0
        self.completed_processes = []
        self.gantt_data = []

    # Purpose: Records data when a process finishes execution
    def log_process(self, pcb):
        turnaround = pcb.end_time - pcb.release_time
        waiting = turnaround - pcb.burst_executed
        self.completed_processes.append({
            'pid': pcb.pid,
            'release': pcb.release_time,
            'start': pcb.start_time,
            'end': pcb.end_time,
            'burst': pcb.burst_executed,
            'turnaround': turnaround,
            'waiting': max(0, waiting),
            'response': pcb.start_time - pcb.release_time,
        })

    # Purpose: Prints a summary table of the collected metrics
    def print_report(self, title="Round Robin"):
        print(f"\nMETRICS REPORT ({title})")
        print(f"{'PID':<5}{'Start':<8}{'End':<8}{'Burst':<8}{'Turnaround':<12}{'Waiting':<10}{'Response':<10}")

        avg_wait, avg_turn = 0, 0
        for p in sorted(self.completed_processes, key=lambda x: x['pid']):
            print(f"{p['pid']:<5}{p['start']:<8}{p['end']:<8}{p['burst']:<8}"
                  f"{p['turnaround']:<12}{p['waiting']:<10}{p['response']:<10}")
            avg_wait += p['waiting']
            avg_turn += p['turnaround']

        count = len(self.completed_processes)
        if count > 0:
            avg_wait /= count
            avg_turn /= count

        print(f"\nAverage Waiting Time: {avg_wait:.2f}")
        print(f"Average Turnaround Time: {avg_turn:.2f}")
        print(f"CPU Utilization: {self.cpu_utilization():.2f}%")
        print(f"Total Context Switches: {self.context_switches}\n")

    def cpu_utilization(self):
        return (self.cpu_active_ticks / max(1, self.total_ticks)) * 100

    # Purpose: Logs one CPU burst for the Gantt chart
    def log_gantt(self, pid, start_tick, end_tick):
        if end_tick > start_tick:
            self.gantt_data.append({'pid': pid, 'start': start_tick, 'end': end_tick})

    # Purpose: Generates a PNG Gantt chart with one row per process
    def export_gantt_chart(self, filename="gantt_RR.png", title="Round Robin"):
        if not self.gantt_data:
            return None

        pids = sorted(set(d['pid'] for d in self.gantt_data))
        pid_to_y = {pid: i for i, pid in enumerate(pids)}
        colors = plt.cm.tab10

        fig, ax = plt.subplots(figsize=(10, max(2, len(pids) * 0.8)))

        for d in self.gantt_data:
            width = d['end'] - d['start']
            y_center = pid_to_y[d['pid']]
            ax.broken_barh(
                [(d['start'], width)],
                (y_center - 0.35, 0.7),
                facecolors=colors(pid_to_y[d['pid']] % 10),
                edgecolor='black'
            )
            ax.text(
                d['start'] + width / 2.0,
                y_center,
                f"P{d['pid']}",
                ha='center',
                va='center',
                fontsize=7
            )

        ax.set_yticks(range(len(pids)))
        ax.set_yticklabels([f"PID {p}" for p in pids])
        ax.set_xlabel("Time (Ticks)")
        ax.set_title(f"Scheduling Gantt Chart: {title}")
        ax.grid(True, axis='x', linestyle='--', alpha=0.5)

        plt.savefig(filename, dpi=150)
        plt.close(fig)
        print(f"[INFO] Gantt chart saved to '{filename}'")
        return filename

    # Purpose: Writes the per-process results as CSV
    def export_csv(self, filename):
        with open(filename, "w") as f:
            f.write("PID,Release,Start,End,Burst,Turnaround,Waiting,Response\n")
            for p in sorted(self.completed_processes, key=lambda x: x['pid']):
                f.write(f"{p['pid']},{p['release']},{p['start']},{p['end']},{p['burst']},"
                        f"{p['turnaround']},{p['waiting']},{p['response']}\n")
        print(f"[INFO] Results exported to '{filename}'")


# Represents the CPU: runs bursts of the dispatched process and interprets its instructions
class CPU:
    def __init__(self, memory, scheduler, pcb_table, clock, metrics,
                 output=print, input_fn=input, verbose=False, delay=0.0):
        self.memory = memory
        self.sched = scheduler
        self.pcbs = pcb_table
        self.clock = clock
        self.metrics = metrics
        self.output = output # sink for print / printFromTo
        self.input_fn = input_fn # source for "assign x input"
        self.verbose = verbose
        self.delay = delay # real seconds per instruction, presentation only

        self.current = None # PID on the CPU, None when idle
        self.handlers = { # opcode dispatch table
            SEM_WAIT: self._sem_wait,
            SEM_SIGNAL: self._sem_signal,
            ASSIGN: self._assign,
            PRINT: self._print,
            PRINT_FROM_TO: self._print_from_to,
            WRITE_FILE: self._write_file,
            READ_FILE: self._read_file,
        }

    @property
    def idle(self):
        return self.current is None

    # Purpose: Switches CPU control to the head of the ready queue
    def dispatch(self):
        pcb = self.sched.select_next()
        if pcb is None:
            return None
        now = self.clock.now
        if pcb.start_time is None:
            pcb.start_time = now
        self.current = pcb.pid
        self.metrics.context_switches += 1
        print(f"[DISPATCH] PID {pcb.pid} at time {now}")
        return pcb

    # Purpose: Runs the current process for up to one quantum, then requeues, blocks or terminates it
    def run_burst(self):
        pcb = self.pcbs[self.current]
        burst_start = self.clock.now
        executed = 0

        while executed < pcb.quantum and self.memory.is_instruction(pcb.pc):
            slot = self.memory.read(pcb.pc)
            if self.verbose:
                print(f"[EXEC] t={self.clock.now} PID {pcb.pid} @{pcb.pc}: {slot.value}")

            still_running = self.execute(pcb, slot.instruction)

            self.clock.tick()
            executed += 1
            pcb.burst_executed += 1
            self.metrics.cpu_active_ticks += 1
            self.metrics.total_ticks += 1
            if self.delay:
                time.sleep(self.delay)

            if not still_running:
                break

            if pcb.pc < pcb.upper_bound:
                pcb.pc += 1

        self.metrics.log_gantt(pcb.pid, burst_start, self.clock.now)
        self.current = None

        if pcb.state == BLOCKED:
            return pcb
        if not self.memory.is_instruction(pcb.pc):
            self._terminate(pcb)
        else:
            self.sched.preempt(pcb)
        return pcb

    # Purpose: Executes one decoded instruction. Returns False when the process blocked
    def execute(self, pcb, instruction):
        opcode, args = instruction
        handler = self.handlers.get(opcode)
        if handler is None:
            return True

        try:
            return handler(pcb, *args) is not False
        except CapacityExceeded as e:
            print(f"[WARN] PID {pcb.pid}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            print(f"[ERROR] PID {pcb.pid}: {e}")
        return True

    def _terminate(self, pcb):
        pcb.end_time = self.clock.now
        self.sched.terminate(pcb)
        self.metrics.log_process(pcb)
        print(f"[TERMINATE] PID {pcb.pid} at time {pcb.end_time}")

    def _sem_wait(self, pcb, resource):
        if self.sched.sem_wait(resource, pcb):
            return True
        print(f"[BLOCK] PID {pcb.pid} waiting on '{resource}'")
        return False

    def _sem_signal(self, pcb, resource):
        woken = self.sched.sem_signal(resource)
        if woken is not None:
            print(f"[UNBLOCK] PID {woken.pid} released from '{resource}'")

    def _assign(self, pcb, name, source, arg):
        if source == SOURCE_INPUT:
            value = self.input_fn(f"Please enter a value for {name}: ").strip()
        elif source == SOURCE_FILE:
            value = read_first_line(arg)
        else:
            value = arg
        self._bind(pcb, name, value)

    # Purpose: Stores a variable in the next reserved slot of the process
    def _bind(self, pcb, name, value):
        if name in (INSTRUCTION, FREE):
            print(f"[WARN] PID {pcb.pid}: '{name}' is not a valid variable name")
            return
        if pcb.var >= INPUT_SPACE_PER_PROCESS:
            raise CapacityExceeded(f"No space left for the variable '{name}'")
        self.memory.write(pcb.next_var_address(), name, value)
        pcb.var += 1

    def _print(self, pcb, name):
        value = self.memory.find(name)
        if value is None:
            print(f"[WARN] PID {pcb.pid}: variable '{name}' not found")
            return
        self.output(value)

    def _print_from_to(self, pcb, first, last):
        bounds = []
        for name in (first, last):
            value = self.memory.find(name)
            try:
                bounds.append(int(value))
            except (TypeError, ValueError):
                print(f"[WARN] PID {pcb.pid}: printFromTo skipped, '{name}' is not a known integer")
                return
        for i in range(bounds[0], bounds[1] + 1):
            self.output(str(i))

    def _write_file(self, pcb, path, name):
        address = self.memory.find_address(
            name, pcb.upper_bound - (INPUT_SPACE_PER_PROCESS - 1), pcb.upper_bound)
        data = name if address is None else self.memory.read(address).value
        with open(path, "w", encoding="utf-8") as f:
            f.write(data)

    def _read_file(self, pcb, path, name):
        if name in (INSTRUCTION, FREE):
            print(f"[WARN] PID {pcb.pid}: '{name}' is not a valid variable name")
            return
        with open(path, encoding="utf-8") as f:
            tokens = f.read().split()
        if not tokens:
            print(f"[WARN] PID {pcb.pid}: file '{path}' is empty")
            return
        address = self.memory.find_address(name)
        if address is not None:
            self.memory.write(address, name, tokens[0])


# Purpose: Reads the first line of a file without its line ending
def read_first_line(path):
    with open(path, encoding="utf-8") as f:
        line = f.readline()
    if not line:
        raise OSError(f"Could not read from file '{path}'")
    return line.rstrip("\r\n")


# Represents the OS Kernel that loads programs and runs the simulation
class Kernel:
    def __init__(self, quantum, memory_size=MEMORY_SIZE, output=print, input_fn=input,
                 verbose=False, delay=0.0):
        if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
            raise ConfigurationError(f"The process can't have zero or less quantum (got {quantum!r})")
        self.quantum = quantum
        self.verbose = verbose

        self.memory = Memory(memory_size)
        self.clock = VirtualClock()
        self.metrics = SimMetrics()
        self.pcbs = {}  # PCB storage
        self.scheduler = Scheduler(self.pcbs)
        self.cpu = CPU(self.memory, self.scheduler, self.pcbs, self.clock, self.metrics,
                       output=output, input_fn=input_fn, verbose=verbose, delay=delay)
        self._next_address = 0

    # Purpose: Loads a program into memory and initializes its PCB
    def create_process(self, lines, release_time=0):
        if isinstance(release_time, bool) or not isinstance(release_time, int) or release_time < 0:
            raise ConfigurationError(f"Release time must be a non-negative integer, got {release_time!r}")

        start = self._next_address
        upper = self.memory.load(start, lines)
        pid = len(self.pcbs) + 1

        pcb = PCB(pid, self.quantum, release_time, start, upper)
        self.pcbs[pid] = pcb
        self.scheduler.add_pending(pcb)
        self._next_address = upper + 1

        print(f"[LOAD] PID {pid} loaded at {start}-{upper}. Release time: {release_time}")
        return pcb

    def terminated_count(self):
        return len(self.scheduler.terminated)

    def all_terminated(self):
        return self.terminated_count() == len(self.pcbs)

    # Purpose: No process can run again: CPU idle, nothing ready or pending, someone blocked
    def deadlocked(self):
        return (self.cpu.idle and not self.scheduler.ready and not self.scheduler.pending
                and self.scheduler.blocked_count() > 0)

    # Purpose: Runs one scheduling iteration (promotion, dispatch, burst)
    def step(self):
        for pcb in self.scheduler.promote(self.clock.now):
            print(f"[PROMOTE] PID {pcb.pid} ready at time {self.clock.now}")

        if self.cpu.idle and self.scheduler.ready:
            self.cpu.dispatch()
            if self.verbose:
                self.print_memory()
                self.print_queues()

        if self.cpu.idle:
            self.clock.tick()
            self.metrics.total_ticks += 1
            return False

        self.cpu.run_burst()
        return True

    # Purpose: Runs the main simulation loop until all processes terminate
    def run(self, max_steps=None):
        print(f"Starting Simulation | Algo: RR | Quantum: {self.quantum}")
        steps = 0
        while not self.all_terminated():
            if self.deadlocked():
                blocked = [f"PID {pid} on '{name}'"
                           for name, sem in self.scheduler.semaphores.items() for pid in sem.blocked]
                print(f"[DEADLOCK] at time {self.clock.now}: " + ", ".join(blocked))
                break
            if max_steps is not None and steps >= max_steps:
                print(f"[WARN] Stopped after {steps} steps at time {self.clock.now}")
                break
            self.step()
            steps += 1
        return self.clock.now

    # Purpose: Prints a summary of results and optional exports
    def shutdown(self, gantt_file=None, csv_file=None):
        self.metrics.print_report(f"Round Robin, quantum {self.quantum}")
        if gantt_file:
            self.metrics.export_gantt_chart(gantt_file, f"Round Robin (q={self.quantum})")
        if csv_file:
            self.metrics.export_csv(csv_file)

    # Purpose: Prints every used memory slot
    def print_memory(self):
        print(f"\n---------- Memory State at Time: {self.clock.now} ----------")
        for address, slot in enumerate(self.memory.slots):
            if slot.name:
                print(f"| {address:<3} | {slot.name:<11} | {slot.value:<20} |")
        print("-" * 46)

    # Purpose: Prints the content of every queue
    def print_queues(self):
        print(f"\n---------- Queue States at Time: {self.clock.now} ----------")
        for name, queue in self.scheduler.queues():
            pids = ", ".join(str(pid) for pid in queue) or "-"
            print(f"{name:<28}: {pids}")


# Purpose: Reads a program file into a list of instruction lines
def read_program(path):
    with open(path, encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


# Purpose: Prompts until the user enters an integer
def prompt_int(message, input_fn=input):
    while True:
        answer = input_fn(message)
        try:
            return int(answer)
        except ValueError:
            print(f"Invalid input '{answer}'. Please enter an integer.")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="os-simulator",
        description="Round robin OS simulator with resource semaphores")
    parser.add_argument("programs", nargs="*", default=DEFAULT_PROGRAMS,
                        help="program files, one process each (default: Program_1.txt .. Program_3.txt)")
    parser.add_argument("--quantum", type=int, help="instructions per time slice")
    parser.add_argument("--release", type=int, nargs="+", help="release time of each program")
    parser.add_argument("--memory-size", type=int, default=MEMORY_SIZE, help="memory slots")
    parser.add_argument("--verbose", action="store_true", help="trace instructions, memory and queues")
    parser.add_argument("--delay", type=float, default=0.0, help="real seconds to wait per instruction")
    parser.add_argument("--gantt", metavar="PNG", help="save a Gantt chart")
    parser.add_argument("--csv", metavar="CSV", help="save per-process results")
    return parser


def main(argv=None, input_fn=input):
    args = build_parser().parse_args(argv)

    try:
        programs = [read_program(path) for path in args.programs]
    except (OSError, UnicodeDecodeError) as e:
        print(f"[ERROR] Failed to open program: {e}")
        return 1

    if args.release is not None and len(args.release) != len(programs):
        print(f"[ERROR] Expected {len(programs)} release times, got {len(args.release)}")
        return 1

    releases = args.release
    if releases is None:
        releases = [prompt_int(f"Enter release time for program {i}: ", input_fn)
                    for i in range(1, len(programs) + 1)]
    quantum = args.quantum
    if quantum is None:
        quantum = prompt_int("Enter quantum time for The OS : ", input_fn)

    try:
        kernel = Kernel(quantum, memory_size=args.memory_size, input_fn=input_fn,
                        verbose=args.verbose, delay=args.delay)
        for lines, release in zip(programs, releases):
            kernel.create_process(lines, release)
    except SimulationError as e:
        print(f"[ERROR] {e}")
        return 1

    kernel.run()
    kernel.shutdown(gantt_file=args.gantt, csv_file=args.csv)
    return 0 if kernel.all_terminated() else 2


if __name__ == "__main__":
    sys.exit(main())
