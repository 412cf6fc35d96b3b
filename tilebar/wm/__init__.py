"""Model of a dynamic tiling window manager: clients, monitors and layouts."""