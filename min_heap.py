class MinPriorityQueue: # binary min-heap of tree nodes, keyed on node.frequency
    def __init__(self, capacity):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity # fixed at construction
        self.entries = [] # implicit array: children of i at 2i+1 and 2i+2

    @property
    def size(self):
        return len(self.entries)

    def __len__(self):
        return len(self.entries)

    def is_empty(self):
        return not self.entries

    def is_full(self):
        return len(self.entries) >= self.capacity

    @classmethod
    def build_from_array(cls, nodes, capacity=None):
        """
        Builds a heap in O(n) from an unordered list of nodes by heapifying
        every parent index bottom-up, instead of n separate inserts
        """
        nodes = list(nodes)
        heap = cls(capacity if capacity is not None else max(1, len(nodes)))
        if len(nodes) > heap.capacity:
            raise IndexError(f"{len(nodes)} nodes exceed heap capacity {heap.capacity}")
        heap.entries = nodes

        # last node sits at n-1, so its parent is (n-2)//2
        for i in range((len(nodes) - 2) // 2, -1, -1):
            heap.heapify(i)
        return heap

    def heapify(self, idx): # sift entries[idx] down until both children are >= it
        entries = self.entries
        n = len(entries)
        while True:
            smallest = idx
            left = 2 * idx + 1
            right = 2 * idx + 2

            # strict comparisons: on a tie the current index stays put
            if left < n and entries[left].frequency < entries[smallest].frequency:
                smallest = left
            if right < n and entries[right].frequency < entries[smallest].frequency:
                smallest = right

            if smallest == idx:
                return
            entries[idx], entries[smallest] = entries[smallest], entries[idx]
            idx = smallest

    def insert(self, node):
        if self.is_full():
            raise IndexError(f"insert into full heap (capacity {self.capacity})")

        entries = self.entries
        entries.append(node)
        i = len(entries) - 1

        # move parents down while strictly heavier, then drop the node into the gap
        while i > 0 and entries[(i - 1) // 2].frequency > node.frequency:
            entries[i] = entries[(i - 1) // 2]
            i = (i - 1) // 2
        entries[i] = node

    def extract_min(self):
        if not self.entries:
            raise IndexError("extract_min from empty heap")

        entries = self.entries
        minimum = entries[0]
        last = entries.pop()
        if entries:
            entries[0] = last
            self.heapify(0)
        return minimum

    def peek(self):
        if not self.entries:
            raise IndexError("peek into empty heap")
        return self.entries[0]

    def is_valid(self) -> bool:
        entries = self.entries
        for i in range(len(entries)):
            for child in (2 * i + 1, 2 * i + 2):
                if child < len(entries) and entries[i].frequency > entries[child].frequency:
                    return False
        return True
