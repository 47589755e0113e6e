# ctrlide

A small desktop IDE for putting together controller projects. It has a project
tree with a host module and the modules attached to it (loop, DI, DO, AI,
relay, communication), and editors for the channels and bits of digital input
(DI) and digital output (DO) modules.

## Installing

```
pip install .
```

The window uses Tkinter from the standard library. The package has no other
dependencies. To run the tests, install the `test` extra (`pip install .[test]`).

## Running the IDE

```
ctrlide [PROJECT.xml] [--themes DIR]
```

This opens the main window. It has the File, Component, Theme and Edit menus,
a toolbar, the project tree and a status bar. Right-clicking a tree item opens
a menu for renaming the project and for adding, configuring, deleting, moving
and reordering components. Ctrl+Up and Ctrl+Down move the selected component.

- `PROJECT.xml`: a project file to open at start-up.
- `--themes DIR`: the directory that holds the `themes/` folder of style
  sheets. The default is the current directory.

## Using the library

### DI and DO modules (`ctrlide.iomodule`)

`DIModule` and `DOModule` have 8, 16 or 32 channels, with 8 bit variables
(`BitVariable`) on each channel. A new module starts with 8 channels.

- `set_channel_count` raises `ValueError` for any other count. Channels that
  remain after a resize keep their bits.
- `channel`, `get_bit` and `set_bit` raise `IndexError` for a channel or bit
  number that is out of range.
- `get_bit` and `set_bit` work on copies of the variable.

```python
from ctrlide.iomodule import DIModule, BitVariable

di = DIModule()
di.set_channel_count(16)
di.set_bit(3, 5, BitVariable(name="door_open", description="Door contact", value=1))
print(di.get_bit(3, 5).name)      # door_open

di.save("di.json")                # JSON with channelCount and channels
other = DIModule()
other.load("di.json")
```

`to_dict` and `load_dict` work with the same structure in memory.
`load_dict` skips any entry that does not fit: an invalid channel count, a
channel number that is out of range, or values of the wrong type.

### Editing channels (`ctrlide.config_editor`)

`DIChannelEditor` and `DOChannelEditor` hold the editing state of the
configuration table for one module. The table has the columns bit, variable
name, value and description.

```python
from ctrlide.config_editor import DOChannelEditor
from ctrlide.iomodule import DOModule

editor = DOChannelEditor(DOModule())
editor.set_channel_count(32)      # also selects channel 0
editor.select_channel(2)
editor.edit_cell(0, 1, "pump_on") # column 1 = name, column 3 = description
editor.set_value(0, 1)            # 0 or 1, anything else raises ValueError
print(editor.rows()[0])
```

Edits to the bit and value columns through `edit_cell` are ignored. The DI
editor also marks an edited bit as global.

### Projects and components

`ctrlide.project.ProjectManager` owns the tree of `TreeItem` nodes. It saves
and loads the tree as XML with `save_project` and `load_project`, and tracks
the unsaved-changes flag.

`ctrlide.components.ComponentManager` lists the component types
(`default_component_types`). It creates `ComponentInfo` values and reorders,
deletes and moves tree items.

`ctrlide.controller.IDEController` ties the project, the components and the
themes together:

```python
from ctrlide.controller import IDEController
from ctrlide.themes import Theme, ThemeManager

ide = IDEController(ThemeManager(".", on_apply=print))
components = ide.components
host = ide.add_component(components.create_component("HostModule", "Host"), None)
ide.add_component(components.create_component("DIModule", "Inputs"), host)
ide.set_theme(Theme.ATOM_ONE)
print(ide.status_message)
```

The controller raises `ComponentError` in these cases:

- adding a second-level module before any host module exists;
- deleting, moving or reordering an item that is not a component under the
  project node.

`cycle_theme` switches to the next theme: default, then ATOM ONE, then
Solarized Light.

### Themes (`ctrlide.themes`)

`ThemeManager(base_dir)` reads these files below `base_dir`:

- `themes/default.qss`
- `themes/atom_one.qss`
- `themes/solarized_light.qss`

A file that is missing or unreadable gives an empty style sheet. `apply`
returns the style sheet and passes it to the `on_apply` callback, if one is
given. Tkinter cannot use these style sheets, so the window's look does not
change when a theme is chosen.

## Limitations

- Only DI and DO modules have a configuration editor. The other module types
  show a "not yet available" message.
- All DI items in a session share one DI module configuration, and all DO
  items share one DO module configuration.
- Channel configurations are not stored in the project file. Saving them is
  up to `IOModule.save`.
- The component library and properties panes of the window are empty.