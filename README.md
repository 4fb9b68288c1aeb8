# xvkit

Small, self-contained pieces of a minimal Unix-like system as a plain Python
package with no third-party dependencies.

## Modules

- `xvkit.layout` – page-table arithmetic (`pg_round_up`, `pg_round_down`,
  `pa2pte`, `pte2pa`, `pte_flags`, `px`, `make_satp`), memory-map helpers
  (`kstack`, `clint_mtimecmp`, `plic_menable`, `plic_senable`,
  `plic_mpriority`, `plic_spriority`, `plic_mclaim`, `plic_sclaim`), kernel
  limits such as `NPROC` and `MAXPATH`, the `FileType` and `OpenFlag` enums,
  the `Stat` and `RtcDate` records, and little-endian packing of executable
  headers with `ElfHeader` and `ProgramHeader` (`from_bytes` / `pack`).
- `xvkit.virtio` – legacy virtio MMIO register offsets and status bits, the
  `DescFlag` flags and the ring structures `VirtqDesc`, `VirtqAvail`,
  `VirtqUsedElem`, `VirtqUsed` and `BlkRequest`, each with `pack` / `unpack`.
  Bad sizes or out-of-range fields raise `ValueError`.
- `xvkit.fmt` – `sprintf` and `fprintf`, a minimal printf understanding
  `%d %l %x %p %s %c %%`. Integers are treated as 32-bit values, `%p` prints
  16 hex digits, `None` prints as `(null)`, unknown conversions are echoed.
- `xvkit.matching` – a tiny regular-expression matcher: `grep_match` searches
  with `^ . * $`, `whole_match` matches an entire string with `.` and `*`;
  `grep` writes the matching newline-terminated lines of a stream.
- `xvkit.umalloc` – `Allocator`, a first-fit, address-ordered circular free
  list with neighbour coalescing over a simulated heap that grows by at least
  4096 16-byte units at a time. `malloc` returns an address, `free` takes one
  back, `free_blocks` lists the free blocks; an exhausted heap raises
  `MemoryError`.
- `xvkit.parkmiller` – `do_rand` and the `ParkMiller` generator (Park–Miller
  minimal standard), iterable and with a `next` method.
- `xvkit.coreutils` – `atoi`, `cat`, `echo` and `word_count`, plus the
  command entry points listed below.
- `xvkit.fsutils` – `basename`, `fmtname`, and the generators `find` and `ls`
  that yield output lines.
- `xvkit.primes` – `primes`, a sieve over any iterable of integers.
- `xvkit.xargs` – `split_lines` and `build_argvs`: one argument vector per
  input line (at most 1024 characters read, at most `MAXARG` lines).
- `xvkit.shellparse` – `parse_command` / `Parser` turn a command line using
  words, `<`, `>`, `>>`, `|`, `;`, `&` and `( )` into a tree of `ExecCmd`,
  `RedirCmd`, `PipeCmd`, `ListCmd`, `BackCmd` and `SubshellCmd`; malformed
  input raises `ShellSyntaxError`.
- `xvkit.lineedit` – `History` (a ring of recent lines with a browsing
  cursor), `LineEditor` (backspace, Ctrl-U to clear, Ctrl-P / Ctrl-N for
  history, Tab to complete names) and `find_matches`.

## Installing

    pip install xvkit

## Commands

    xv-grep 'ab*c' file.txt     # print matching lines (stdin if no file)
    xv-cat file.txt             # copy files (or stdin) to stdout
    xv-echo hello world
    xv-wc file.txt              # lines, words, bytes, name
    xv-mkdir newdir
    xv-rm old.txt               # files and empty directories
    xv-ln old new               # hard link
    xv-kill 1234                # kill processes by pid
    xv-sleep 10                 # sleep in ticks of 0.1 s
    xv-find . 'a.*'             # files whose whole name matches
    xv-ls .                     # name, type, inode, size
    xv-primes                   # primes up to 35

## Library use

    from xvkit.fmt import sprintf
    from xvkit.matching import grep_match
    from xvkit.shellparse import parse_command
    from xvkit.umalloc import Allocator

    sprintf("%d items at %p\n", 3, 0x1000)
    grep_match("^a.c$", "abc")          # True
    cmd = parse_command("cat < in | wc > out &")

    heap = Allocator(1 << 20)
    addr = heap.malloc(100)
    heap.free(addr)

## What it does not do

- There is no shell: `xvkit.shellparse` builds command trees and
  `xvkit.lineedit` reads lines, but nothing runs the commands.
- `xvkit.xargs` only builds argument vectors; it starts no programs and has
  no command.
- There is no kernel, file system image or process scheduler; `xvkit.layout`
  and `xvkit.virtio` only describe addresses and record formats.

## Tests

    pip install "xvkit[test]"
    pytest