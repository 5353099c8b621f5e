# tests/test_queues.py
import os_simulator as sim


def _scheduler(*release_times):
    pcbs = {}
    sched = sim.Scheduler(pcbs)
    for i, release in enumerate(release_times, start=1):
        pcbs[i] = sim.PCB(i, 2, release, 0, 3)
        sched.add_pending(pcbs[i])
    return sched, pcbs


def test_fifo_order_and_empty_dequeue():
    q = sim.ProcessQueue("q")
    for pid in (3, 1, 2):
        q.enqueue(pid)
    assert q.front() == 3
    assert [q.dequeue(), q.dequeue(), q.dequeue()] == [3, 1, 2]
    assert q.dequeue() is None
    assert q.front() is None


def test_remove_keeps_relative_order():
    q = sim.ProcessQueue("q")
    for pid in (1, 2, 3, 4):
        q.enqueue(pid)
    assert q.remove(3)
    assert not q.remove(9)
    assert list(q) == [1, 2, 4]
    assert 3 not in q and len(q) == 3


def test_promote_moves_only_due_processes_in_order():
    sched, pcbs = _scheduler(5, 0, 3, 0)
    promoted = sched.promote(3)
    assert [p.pid for p in promoted] == [2, 3, 4]
    assert list(sched.ready) == [2, 3, 4]
    assert list(sched.pending) == [1]
    assert pcbs[1].state == sim.PENDING
    assert all(pcbs[pid].state == sim.READY for pid in (2, 3, 4))


def test_select_next_and_preempt():
    sched, pcbs = _scheduler(0, 0)
    sched.promote(0)
    pcb = sched.select_next()
    assert pcb.pid == 1 and pcb.state == sim.RUNNING
    assert list(sched.running) == [1]
    sched.preempt(pcb)
    assert list(sched.ready) == [2, 1]
    assert not sched.running
    sched.ready.dequeue()
    sched.ready.dequeue()
    assert sched.select_next() is None


def test_sem_wait_blocks_when_resource_taken():
    sched, pcbs = _scheduler(0, 0)
    sched.promote(0)
    first = sched.select_next()
    assert sched.sem_wait("file", first)
    sched.preempt(first)

    second = sched.select_next()
    assert not sched.sem_wait("file", second)
    assert second.state == sim.BLOCKED
    assert second.blocked_resource == "file"
    assert second.pid not in sched.running
    assert list(sched.semaphores["file"].blocked) == [2]
    # other resources are independent
    assert sched.semaphores["userInput"].available


def test_sem_signal_wakes_front_without_hand_off():
    sched, pcbs = _scheduler(0, 0, 0)
    sched.promote(0)
    holder = sched.select_next()
    sched.sem_wait("userOutput", holder)
    sched.preempt(holder)
    for _ in range(2):
        waiter = sched.select_next()
        sched.sem_wait("userOutput", waiter)
    assert list(sched.semaphores["userOutput"].blocked) == [2, 3]

    woken = sched.sem_signal("userOutput")
    assert woken.pid == 2
    assert woken.state == sim.READY and woken.blocked_resource == ""
    assert list(sched.ready) == [1, 2]
    assert list(sched.semaphores["userOutput"].blocked) == [3]
    # the resource is free again, whoever asks first gets it
    assert sched.semaphores["userOutput"].available
    assert sched.sem_wait("userOutput", pcbs[1])
    assert not sched.semaphores["userOutput"].available


def test_sem_signal_is_binary():
    sched, _ = _scheduler()
    sched.sem_signal("file")
    sched.sem_signal("file")
    assert sched.semaphores["file"].count == 1
    assert sched.sem_signal("file") is None
